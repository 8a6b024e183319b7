from keepsake.shared.utils.generators import (current_time_millis,
                                             generate_backfill_id,
                                             generate_item_id,
                                             generate_upload_name)
from keepsake.shared.utils.sanitization import (decode_data_url,
                                               sanitize_extension)

__all__ = [
    "current_time_millis",
    "generate_item_id",
    "generate_backfill_id",
    "generate_upload_name",
    "decode_data_url",
    "sanitize_extension",
]
