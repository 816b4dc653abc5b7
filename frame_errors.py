# frame_errors.py


class FrameConvertError(Exception):
    """Base class for everything the converter raises on purpose."""


class DirectoryNotFoundError(FrameConvertError):
    pass


class EmptyBatchError(FrameConvertError):
    """No eligible images in the folder, or none of them could be packed."""


class DecodeError(FrameConvertError):
    """The file was read but is not an image we can decode."""


class InvalidInputError(FrameConvertError, ValueError):
    pass
