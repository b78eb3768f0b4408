from .generated import Base, BlackoutDates, DeliveryDayCounts, ProductDeliveryCache, ShopSettings

__all__ = [
    "Base",
    "BlackoutDates",
    "DeliveryDayCounts",
    "ProductDeliveryCache",
    "ShopSettings",
]
