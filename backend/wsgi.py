# backend/wsgi.py
from permgate import create_app

app = create_app()
