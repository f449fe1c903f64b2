# app/state - Session state management
from .session import (
    get_structure,
    set_structure,
    pop_stale_result_notice,
    get_result,
    set_result,
    clear_result,
    get_calculator,
    is_new_upload,
    get_step,
    set_step,
)

__all__ = [
    'get_structure',
    'set_structure',
    'pop_stale_result_notice',
    'get_result',
    'set_result',
    'clear_result',
    'get_calculator',
    'is_new_upload',
    'get_step',
    'set_step',
]
