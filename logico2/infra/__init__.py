# logico2/infra/__init__.py
