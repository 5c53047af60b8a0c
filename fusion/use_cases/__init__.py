from .combine import combine_predictions, combine_rows

__all__ = ["combine_predictions", "combine_rows"]
