"""Browser Switcher - route URLs to browsers by hostname rules"""

__version__ = "1.0.0"
