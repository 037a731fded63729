from .convert import handle_convert, _convert_single_file, _print_batch_summary

__all__ = [
  "handle_convert",
]
