from imgds.dataset.builder import build_dataset, collect_dataset
from imgds.dataset.loader import load_and_resize_image, try_load_image
from imgds.dataset.scan import extract_class_description, scan_image_directory
from imgds.dataset.serialize import read_dataset, write_dataset
from imgds.dataset.split import load_and_split, split_dataset

__all__ = [
    "build_dataset",
    "collect_dataset",
    "extract_class_description",
    "load_and_resize_image",
    "load_and_split",
    "read_dataset",
    "scan_image_directory",
    "split_dataset",
    "try_load_image",
    "write_dataset",
]
