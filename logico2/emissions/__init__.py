# logico2/emissions/__init__.py
