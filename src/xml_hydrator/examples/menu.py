"""Sample entities: a breakfast menu with food items.

Used by the ``xml-hydrate`` demo and as a reference for writing mappings::

    xml-hydrate hydrate menu.xml --type xml_hydrator.examples.menu:Menu
"""

from typing import Any, Optional

from xml_hydrator.mapping import ChildRule, MappingDescription

SAMPLE_MENU_XML = """<?xml version="1.0" encoding="UTF-8"?>
<menu serving="morning">
    <type>breakfast</type>
    <food id="1">
        <name>Belgian Waffles</name>
        <price>$5.95</price>
        <description>Two of our famous Belgian Waffles with plenty of real maple syrup</description>
        <calories>650</calories>
    </food>
    <food id="2">
        <name>Strawberry Belgian Waffles</name>
        <price>$7.95</price>
        <description>Light Belgian waffles covered with strawberries and whipped cream</description>
        <calories>900</calories>
    </food>
    <food id="3">
        <name>French Toast</name>
        <price>$4.50</price>
        <description>Thick slices made from our homemade sourdough bread</description>
        <calories>600</calories>
    </food>
</menu>
"""


class FoodItem:
    XML_MAPPING = MappingDescription.build(
        fields={
            "foodId": "set_id",
            "name": "set_name",
            "price": "set_price",
            "description": "set_description",
            "calories": "set_calories",
        },
    )

    def __init__(self) -> None:
        self.id: Optional[str] = None
        self.name: Optional[str] = None
        self.price: Optional[str] = None
        self.description: Optional[str] = None
        self.calories: Optional[str] = None
        self.parent: Optional[Any] = None

    def set_id(self, value: str) -> None:
        self.id = value

    def set_name(self, value: str) -> None:
        self.name = value

    def set_price(self, value: str) -> None:
        self.price = value

    def set_description(self, value: str) -> None:
        self.description = value

    def set_calories(self, value: str) -> None:
        self.calories = value

    def set_parent(self, parent: Any) -> None:
        self.parent = parent


class Menu:
    XML_MAPPING = MappingDescription.build(
        parent_node="menu",
        fields={
            "type": "set_menu_type",
            "menuServing": "set_serving_time",
        },
        children={
            "food": ChildRule(FoodItem, parent_link="set_parent"),
        },
    )

    def __init__(self) -> None:
        self.menu_type: Optional[str] = None
        self.serving_time: Optional[str] = None

    def set_menu_type(self, value: str) -> None:
        self.menu_type = value

    def set_serving_time(self, value: str) -> None:
        self.serving_time = value
