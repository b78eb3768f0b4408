from sqlalchemy import Column, Integer, Text, UniqueConstraint, text

from sqlalchemy.orm import declarative_base

Base = declarative_base()
metadata = Base.metadata


class ShopSettings(Base):
    __tablename__ = 'shop_settings'

    shop = Column(Text, nullable=False, unique=True)
    cutoff_time = Column(Text, nullable=False, server_default=text("'14:00'"))
    daily_capacity = Column(Integer, nullable=False, server_default=text('50'))
    max_days_ahead = Column(Integer, nullable=False, server_default=text('30'))
    allow_weekend_delivery = Column(Integer, nullable=False, server_default=text('0'))
    timezone = Column(Text, nullable=False, server_default=text("'UTC'"))
    show_on_cart_page = Column(Integer, nullable=False, server_default=text('0'))
    id = Column(Integer, primary_key=True)
    updated_at = Column(Text, server_default=text('CURRENT_TIMESTAMP'))


class BlackoutDates(Base):
    __tablename__ = 'blackout_dates'

    shop = Column(Text, nullable=False, index=True)
    date = Column(Text, nullable=False)
    recurring = Column(Integer, nullable=False, server_default=text('0'))
    id = Column(Integer, primary_key=True)
    label = Column(Text)
    created_at = Column(Text, server_default=text('CURRENT_TIMESTAMP'))


class ProductDeliveryCache(Base):
    __tablename__ = 'product_delivery_cache'
    __table_args__ = (
        UniqueConstraint('shop', 'product_id'),
    )

    shop = Column(Text, nullable=False)
    product_id = Column(Text, nullable=False)
    id = Column(Integer, primary_key=True)
    enabled = Column(Integer)
    cutoff_hours = Column(Integer)
    max_days_ahead = Column(Integer)
    daily_capacity = Column(Integer)
    updated_at = Column(Text, server_default=text('CURRENT_TIMESTAMP'))


class DeliveryDayCounts(Base):
    __tablename__ = 'delivery_day_counts'
    __table_args__ = (
        UniqueConstraint('shop', 'date'),
    )

    shop = Column(Text, nullable=False)
    date = Column(Text, nullable=False)
    count = Column(Integer, nullable=False, server_default=text('0'))
    id = Column(Integer, primary_key=True)
