from bendcut._logging import consolelog
from bendcut.api import solve
from bendcut.config import Config
from bendcut.staging import ProblemData

__all__ = ["solve", "Config", "ProblemData", "consolelog"]
