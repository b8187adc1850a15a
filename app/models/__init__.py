from app.models.user import User
from app.models.car import Car
from app.models.order import Order
