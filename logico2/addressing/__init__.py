# logico2/addressing/__init__.py
