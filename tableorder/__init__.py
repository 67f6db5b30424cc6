"""
                Table Order API

Restaurant ordering backend: administrators manage the menu and
review orders, customers register at a table, browse the menu and
place orders made of menu items.

Version: 1.0.0
License: MIT
"""

__version__ = "1.0.0"
