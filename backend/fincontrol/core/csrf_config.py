"""
CSRF protection configuration.

This module provides a centralized CSRFProtect instance that is:
1. Initialized in main.py with the Flask app
2. Importable by controllers that need ``@csrf.exempt``

Every form template renders ``{{ csrf_token() }}`` in a hidden field.
"""

from flask_wtf.csrf import CSRFProtect

# Global CSRF instance - initialized in create_app()
csrf = CSRFProtect()
