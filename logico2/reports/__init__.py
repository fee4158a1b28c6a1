# logico2/reports/__init__.py
