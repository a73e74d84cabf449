# freshcart/main.py
from freshcart.api import create_app
from freshcart.data.database import Base, engine
from freshcart.utils.logging import get_logger
import uvicorn

logger = get_logger(__name__)

# IMPORT WSZYSTKICH MODELI NA POCZATKU (PRZED JAKIMKOLWIEK CREATE_ALL)
from freshcart.data.models import UserModel, ProfileModel, OrderModel, OrderItemModel  # noqa: F401

logger.info(f"Models registered in Base.metadata: {list(Base.metadata.tables.keys())}")

try:
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables created")
except Exception as e:
    logger.error(f"Failed to create tables: {e}")
    raise


app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
