# backend/delivery_dates/routers/blackouts.py
# PATCH is not offered: delete and re-create an entry instead.

from fastapi import APIRouter, Depends, HTTPException, status

from ..deps import get_stores, path_shop, require_admin
from ..schemas.blackouts import BlackoutCreate, BlackoutRead
from ..services.delivery import DeliveryStores
from ..services.delivery.blackout import add_blackout, list_blackouts, remove_blackout

router = APIRouter(prefix="/blackouts", tags=["blackouts"], dependencies=[Depends(require_admin)])


@router.get("/{shop}", response_model=list[BlackoutRead])
def get_blackouts(
    shop: str = Depends(path_shop),
    stores: DeliveryStores = Depends(get_stores),
):
    return list_blackouts(stores.blackouts, shop)


@router.post(
    "/{shop}", response_model=BlackoutRead, status_code=status.HTTP_201_CREATED
)
def create_blackout(
    data: BlackoutCreate,
    shop: str = Depends(path_shop),
    stores: DeliveryStores = Depends(get_stores),
):
    return add_blackout(
        stores.blackouts,
        shop,
        data.date,
        recurring=data.recurring,
        label=data.label,
    )


@router.delete("/{shop}/{id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_blackout(
    id: int,
    shop: str = Depends(path_shop),
    stores: DeliveryStores = Depends(get_stores),
):
    if not remove_blackout(stores.blackouts, shop, id):
        raise HTTPException(status_code=404, detail="Not found")
