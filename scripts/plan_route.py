#!/usr/bin/env python3
# scripts/plan_route.py
# -*- coding: utf-8 -*-

"""
Resolve origin and destiny (address or 'lat,lon'), route between them and
print JSON. Works without ORS_API_KEY: the community services and, at
worst, the hub-city estimate are used.

    python scripts/plan_route.py --origin "São Paulo, SP" --destiny "Rio de Janeiro, RJ" --pretty
"""

from __future__ import annotations

# --- path bootstrap (must be the first lines of the file) ---
from pathlib import Path
import sys
ROOT = Path(__file__).resolve().parents[1]  # repo root (one level above /scripts)
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))
# ------------------------------------------------------------

import argparse
import asyncio
import json
import logging

from logico2.core.models import InvalidInput
from logico2.infra.logging import init_logging
from logico2.reports.formatting import format_distance, format_duration
from logico2.road.ors_common import AddressNotFound
from logico2.road.providers import ProviderSet
from logico2.road.router import route_between

log = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        description="Geocode two places and compute the road route between them (ORS → OSRM → estimate)."
    )
    p.add_argument("--origin", required=True, help="Origin (address/city/'lat,lon').")
    p.add_argument("--destiny", required=True, help="Destiny (address/city/'lat,lon').")
    p.add_argument(
          "--timeout-s"
        , type=float
        , default=None
        , help="Per-tier time budget in seconds. Default: LOGICO2_TIER_TIMEOUT_S or 10."
    )
    p.add_argument(
          "--profile"
        , default="driving-car"
        , choices=["driving-car", "driving-hgv"]
        , help="ORS directions profile (used when ORS_API_KEY is set). Default: driving-car"
    )
    p.add_argument("--geometry", action="store_true", help="Include the GeoJSON LineString.")

    # UX
    p.add_argument("--pretty", action="store_true", help="Pretty-print JSON.")
    p.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return p


_PLACE_FLAGS = ("--origin", "--destiny")


def _attach_place_values(argv):
    """
    argparse reads "-22.9,-43.1" after --origin/--destiny as another flag;
    fold such pairs into the "--destiny=-22.9,-43.1" form it accepts.
    """
    out = []
    items = list(sys.argv[1:] if argv is None else argv)
    i = 0
    while i < len(items):
        item = items[i]
        if item in _PLACE_FLAGS and i + 1 < len(items) and not items[i + 1].startswith("--"):
            out.append(f"{item}={items[i + 1]}")
            i += 2
            continue
        out.append(item)
        i += 1
    return out


def main(argv=None) -> int:
    args = _build_parser().parse_args(_attach_place_values(argv))

    init_logging(level=args.log_level, force=True, write_output=False)

    providers = ProviderSet.from_env(ors_profile=args.profile)
    try:
        plan = asyncio.run(route_between(
              args.origin
            , args.destiny
            , providers=providers
            , timeout_s=args.timeout_s
        ))
    except AddressNotFound as exc:
        log.error("Address not found: %r", exc.address)
        print(json.dumps({"error": AddressNotFound.USER_MESSAGE, "address": exc.address}, ensure_ascii=False))
        return 2
    except InvalidInput as exc:
        log.error("%s", exc)
        print(json.dumps({"error": str(exc)}, ensure_ascii=False))
        return 2
    finally:
        providers.close()

    out = plan.to_dict(include_geometry=args.geometry)
    out["display"] = {
          "distance": format_distance(plan.route.distance_meters)
        , "duration": format_duration(plan.route.duration_seconds)
    }

    if args.pretty:
        print(json.dumps(out, ensure_ascii=False, indent=2))
    else:
        print(json.dumps(out, ensure_ascii=False, separators=(",", ":")))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
