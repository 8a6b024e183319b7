from keepsake.presentation.api.v1.routes import (items, start_date, static,
                                                 uploads)

__all__ = ["items", "start_date", "static", "uploads"]
