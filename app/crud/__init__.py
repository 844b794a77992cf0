from app.crud.blocks import (
    add_block,
    delete_block,
    get_all_blocks,
    get_block_by_id,
    get_blocks_after_start,
    get_blocks_before_end,
    get_blocks_within_range,
    update_block,
    update_block_end,
    update_block_homeoffice,
    update_block_start,
)
from app.crud.errors import (
    ConflictError,
    InternalError,
    NotFoundError,
    PartialBlockError,
    ReferentialError,
    StoreError,
)
from app.crud.lifecycle import (
    end_block,
    end_pause,
    get_current,
    get_current_block,
    start_block,
    start_pause,
)
from app.crud.pauses import (
    add_pause,
    delete_pause,
    get_pause_by_id,
    get_pauses_by_block_id,
    update_pause,
    update_pause_end,
    update_pause_start,
)

__all__ = [
    "add_block",
    "add_pause",
    "delete_block",
    "delete_pause",
    "end_block",
    "end_pause",
    "get_all_blocks",
    "get_block_by_id",
    "get_blocks_after_start",
    "get_blocks_before_end",
    "get_blocks_within_range",
    "get_current",
    "get_current_block",
    "get_pause_by_id",
    "get_pauses_by_block_id",
    "start_block",
    "start_pause",
    "update_block",
    "update_block_end",
    "update_block_homeoffice",
    "update_block_start",
    "update_pause",
    "update_pause_end",
    "update_pause_start",
    "ConflictError",
    "InternalError",
    "NotFoundError",
    "PartialBlockError",
    "ReferentialError",
    "StoreError",
]
