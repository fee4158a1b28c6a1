# logico2/road/__init__.py
