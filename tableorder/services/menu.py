"""
Menu Catalog

CRUD over menu entries, addressed either by id or by name.

Name addressing:
    - get_by_name: case-sensitive substring match, first record by id
    - update_by_name / delete_by_name: exact name match, first record by id
"""

import logging
from typing import List

from sqlalchemy import select

from tableorder.core.exceptions import NotFound
from tableorder.models import Menu, is_storable_id
from tableorder.schemas import MenuCreate
from tableorder.services.base import BaseService

logger = logging.getLogger(__name__)

MENU_NOT_FOUND = "Menu not found"


class MenuCatalog(BaseService):
    """Menu management for admins and menu browsing for customers."""

    async def list_all(self) -> List[Menu]:
        result = await self.session.execute(select(Menu).order_by(Menu.id))
        return list(result.scalars().all())

    async def get_by_id(self, menu_id: int) -> Menu:
        # Ids past the column range cannot exist; the driver would reject them
        if not is_storable_id(menu_id):
            raise NotFound(MENU_NOT_FOUND)
        menu = await self.session.get(Menu, menu_id)
        if menu is None:
            raise NotFound(MENU_NOT_FOUND)
        return menu

    async def get_by_name(self, name: str) -> Menu:
        """
        Return the first menu whose name contains `name`.

        LIKE is case-insensitive on some backends, so candidates are
        re-checked in Python to keep the match case-sensitive.
        """
        result = await self.session.execute(
            select(Menu)
            .where(Menu.name.contains(name, autoescape=True))
            .order_by(Menu.id)
        )
        for menu in result.scalars():
            if name in menu.name:
                return menu
        raise NotFound(MENU_NOT_FOUND)

    async def _get_exact_name(self, name: str) -> Menu:
        result = await self.session.execute(
            select(Menu).where(Menu.name == name).order_by(Menu.id).limit(1)
        )
        menu = result.scalar_one_or_none()
        if menu is None:
            raise NotFound(MENU_NOT_FOUND)
        return menu

    async def create(self, data: MenuCreate) -> Menu:
        menu = Menu(**data.model_dump())
        self.session.add(menu)
        await self._commit("Failed to create menu")
        await self.session.refresh(menu)

        logger.info(f"Menu #{menu.id} '{menu.name}' created")
        return menu

    async def _replace(self, menu: Menu, data: MenuCreate) -> Menu:
        menu.name = data.name
        menu.image_url = data.image_url
        menu.type = data.type
        menu.price = data.price
        menu.available = data.available

        await self._commit("Failed to update menu")
        await self.session.refresh(menu)

        logger.info(f"Menu #{menu.id} updated")
        return menu

    async def update_by_id(self, menu_id: int, data: MenuCreate) -> Menu:
        return await self._replace(await self.get_by_id(menu_id), data)

    async def update_by_name(self, name: str, data: MenuCreate) -> Menu:
        return await self._replace(await self._get_exact_name(name), data)

    async def _delete(self, menu: Menu) -> None:
        await self.session.delete(menu)
        await self._commit("Failed to delete menu")
        logger.info(f"Menu #{menu.id} '{menu.name}' deleted")

    async def delete_by_id(self, menu_id: int) -> None:
        await self._delete(await self.get_by_id(menu_id))

    async def delete_by_name(self, name: str) -> None:
        await self._delete(await self._get_exact_name(name))
