# logico2/core/__init__.py
