"""Sample hydratable entities."""

from .menu import SAMPLE_MENU_XML, FoodItem, Menu

__all__ = ["SAMPLE_MENU_XML", "FoodItem", "Menu"]
