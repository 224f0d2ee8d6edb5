"""Errors raised by the NDVI bloom explorer."""


class NDVIBloomError(Exception):
    """Base class for all package errors"""


class LoadError(NDVIBloomError):
    """The NDVI dataset could not be fetched or its payload is malformed"""


class EmptyDatasetError(NDVIBloomError):
    """Nearest-location lookup on a dataset without locations"""
