import logging

from handcontrol.config import Config
from handcontrol.detector import download_model

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    download_model(Config.MODEL_PATH)
