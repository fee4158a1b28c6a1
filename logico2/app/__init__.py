# logico2/app/__init__.py
