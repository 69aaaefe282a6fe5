import os

from dotenv import load_dotenv

from common.constants import FORMAT_MORPHOLOGY

load_dotenv()

CORPUS_PATH = os.getenv("CORPUS_PATH")
CORPUS_FORMAT = os.getenv("CORPUS_FORMAT", FORMAT_MORPHOLOGY)
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
MAX_COLLOCATES = int(os.getenv("MAX_COLLOCATES", "34"))
CACHE_SIZE = int(os.getenv("CACHE_SIZE", "64"))
