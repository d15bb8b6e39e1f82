"""Image handling: data-URIs and upload compression."""

from facefortune.images.datauri import (
    DataURI,
    InvalidDataURIError,
    parse_data_uri,
    to_data_uri,
)
from facefortune.images.preprocess import (
    ImageError,
    ImageProcessingError,
    ImageTooLargeError,
    compress_file,
    compress_image,
    make_thumbnail,
    target_size,
)

__all__ = [
    "DataURI",
    "ImageError",
    "ImageProcessingError",
    "ImageTooLargeError",
    "InvalidDataURIError",
    "compress_file",
    "compress_image",
    "make_thumbnail",
    "parse_data_uri",
    "target_size",
    "to_data_uri",
]
