# stayplanner/api/routers/properties.py
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from stayplanner.db.session import get_db
from stayplanner.db import crud_properties
from stayplanner.schemas.property import PropertyBase, PropertyCreate

router = APIRouter()


@router.get("/properties")
async def list_properties(db: AsyncSession = Depends(get_db)):
    items = await crud_properties.list_properties(db)
    return {
        "success": True,
        "data": {"items": [PropertyBase.model_validate(p).model_dump() for p in items]},
    }


@router.get("/properties/{prop_id}")
async def get_property_detail(prop_id: int, db: AsyncSession = Depends(get_db)):
    prop = await crud_properties.get_property(db, prop_id)
    if not prop:
        raise HTTPException(status_code=404, detail="Not found")

    return {"success": True, "data": PropertyBase.model_validate(prop).model_dump()}


@router.post("/properties", status_code=201)
async def create_property(body: PropertyCreate, db: AsyncSession = Depends(get_db)):
    if await crud_properties.get_property_by_slug(db, body.slug):
        raise HTTPException(status_code=400, detail="Slug already in use")

    prop = await crud_properties.create_property(db, **body.model_dump())
    return {"success": True, "data": PropertyBase.model_validate(prop).model_dump()}
