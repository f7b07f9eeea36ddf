# stayplanner/db/crud_properties.py
from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from stayplanner.db.models import Property


async def get_property(db: AsyncSession, prop_id: int) -> Property | None:
    res = await db.execute(select(Property).where(Property.id == prop_id))
    return res.scalars().first()


async def get_property_by_slug(db: AsyncSession, slug: str) -> Property | None:
    res = await db.execute(select(Property).where(Property.slug == slug).limit(1))
    return res.scalars().first()


async def list_properties(db: AsyncSession) -> List[Property]:
    """
    Public listing: active properties only, recent first.
    """
    res = await db.execute(
        select(Property)
        .where(Property.is_active.is_(True))
        .order_by(Property.id.desc())
    )
    return list(res.scalars().all())


async def create_property(db: AsyncSession, **kwargs) -> Property:
    prop = Property(**kwargs)
    db.add(prop)
    await db.commit()
    await db.refresh(prop)
    return prop
