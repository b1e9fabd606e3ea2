# MongoDB connection and Beanie initialization
import os
import logging
from motor.motor_asyncio import AsyncIOMotorClient # Async driver for MongoDB
from beanie import init_beanie # ODM (Object-Document Mapper) for MongoDB
from dotenv import load_dotenv # Loads environment variables from .env
from typing import Type

from .user import User
from .friend_request import FriendRequest
from .friendship import Friendship
from .collection import Collection
from .label import Label

logger = logging.getLogger(__name__)

# Every Beanie model must be registered here
DOCUMENT_MODELS: list[Type] = [User, FriendRequest, Friendship, Collection, Label]

client = None  # process-wide client, created once

async def init_db(mongo_client=None):
    """
    Connect to MongoDB and initialize Beanie.
    Only one client is ever created; an already built client (for example an
    in-memory mock) can be passed in instead of reading MONGO_URI.
    """
    global client

    if mongo_client is None and client is not None:
        return client

    load_dotenv()
    database_name = os.getenv("MONGO_DB_NAME", "bazaar")

    if mongo_client is None:
        mongo_uri = os.getenv("MONGO_URI")
        if not mongo_uri:
            raise ValueError("MONGO_URI is not set in the environment.")
        mongo_client = AsyncIOMotorClient(mongo_uri)

    client = mongo_client
    database = client.get_database(database_name)

    await init_beanie(database=database, document_models=DOCUMENT_MODELS)
    logger.info(f"Beanie initialized on database '{database_name}'")

    return client
