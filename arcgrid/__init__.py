"""Grid images, task I/O, transforms, normalisation and answer scoring for reasoning puzzles."""

__version__ = "0.1.0"
__all__ = ["image", "loader", "task_io", "visu", "transforms", "score", "normalize"]