# backend/delivery_dates/routers/settings.py
# Shop owner configuration. A shop without a row reads as the defaults.

from dataclasses import asdict

from fastapi import APIRouter, Depends

from ..deps import get_stores, path_shop, require_admin
from ..schemas.settings import ShopSettingsRead, ShopSettingsUpdate
from ..services.delivery import DeliveryStores, get_shop_settings

router = APIRouter(prefix="/settings", tags=["settings"], dependencies=[Depends(require_admin)])


@router.get("/{shop}", response_model=ShopSettingsRead)
def get_settings(
    shop: str = Depends(path_shop),
    stores: DeliveryStores = Depends(get_stores),
):
    return ShopSettingsRead(shop=shop, **asdict(get_shop_settings(stores.settings, shop)))


@router.put("/{shop}", response_model=ShopSettingsRead)
def update_settings(
    data: ShopSettingsUpdate,
    shop: str = Depends(path_shop),
    stores: DeliveryStores = Depends(get_stores),
):
    saved = stores.settings.upsert(shop, data)
    return ShopSettingsRead(shop=shop, **asdict(saved))
