from motor.motor_asyncio import AsyncIOMotorClient
from config import settings


# every driver call is bounded by these timeouts
client = AsyncIOMotorClient(
    settings.MONGODB_URL,
    serverSelectionTimeoutMS=settings.MONGODB_TIMEOUT_MS,
    connectTimeoutMS=settings.MONGODB_TIMEOUT_MS,
    socketTimeoutMS=settings.MONGODB_TIMEOUT_MS,
)
db = client[settings.MONGODB_DATABASE]


employees_collection = db.employees
leaves_collection = db.leaves
holidays_collection = db.public_holidays
notifications_collection = db.notifications
system_activity_collection = db.system_activity
