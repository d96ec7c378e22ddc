import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

INPUT_EXTENSION = os.getenv("INPUT_EXTENSION", ".bmp")
OUTPUT_SUFFIX = os.getenv("OUTPUT_SUFFIX", "_edges")
VALID_IMAGE_EXTENSIONS = {
    ext.strip().lower()
    for ext in os.getenv("VALID_IMAGE_EXTENSIONS", ".bmp").split(",")
    if ext.strip()
}
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
