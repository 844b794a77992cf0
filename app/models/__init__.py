from app.models.block import Block
from app.models.current import CURRENT_ROW_ID, NONE_ID, Current
from app.models.pause import Pause

__all__ = ["Block", "Pause", "Current", "CURRENT_ROW_ID", "NONE_ID"]
