import os
from dotenv import load_dotenv

load_dotenv()


# MongoDB
DATABASE_URL = os.getenv("MONGODB_URI")
DATABASE_NAME = os.getenv("MONGODB_DATABASE", "test")
REVIEW_COLLECTION = os.getenv("REVIEW_COLLECTION", "reviews")

# Server
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT") or 3000)
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
