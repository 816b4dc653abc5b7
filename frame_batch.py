# frame_batch.py
import os
from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

from frame_decoder import load_pixels
from frame_errors import DecodeError, DirectoryNotFoundError, EmptyBatchError
from frame_packer import Thresholder

IMAGE_EXTENSIONS = (".png", ".jpg", ".jpeg", ".bmp", ".gif")


@dataclass(frozen=True)
class FrameRecord:
    filename: str
    data: bytes


@dataclass(frozen=True)
class FrameFailure:
    filename: str
    message: str


def list_images(folder) -> List[str]:
    """Eligible image filenames in `folder`, sorted by codepoint.

    Playback order is this sort order, so numbered frames need zero
    padding (frame_001.png, frame_002.png, ...).
    """
    if not os.path.isdir(folder):
        raise DirectoryNotFoundError(f'Folder "{folder}" does not exist')

    names = []
    for name in os.listdir(folder):
        if os.path.splitext(name)[1].lower() not in IMAGE_EXTENSIONS:
            continue
        if not os.path.isfile(os.path.join(folder, name)):
            continue
        names.append(name)
    return sorted(names)


def process_folder(
    folder,
    width: int,
    height: int,
    thresholder: Optional[Thresholder] = None,
    verbose: bool = True,
) -> Tuple[List[FrameRecord], List[FrameFailure]]:
    """Pack every image in `folder` into a 1-bit frame, in filename order.

    A file that can't be read or decoded is recorded as a FrameFailure and
    the rest of the batch carries on. Raises EmptyBatchError when there is
    nothing to pack or nothing could be packed.
    """
    thresholder = thresholder or Thresholder()
    names = list_images(folder)
    if not names:
        raise EmptyBatchError(f'No images found in "{folder}"')

    if verbose:
        print(f"[Batch] Found {len(names)} images:")
        for i, name in enumerate(names, start=1):
            print(f"  {i}. {name}")

    frames = []
    failures = []

    for i, name in enumerate(names, start=1):
        if verbose:
            print(f"[Batch] [{i}/{len(names)}] Processing {name}...")

        result = _process_file(folder, name, width, height, thresholder)
        if isinstance(result, FrameFailure):
            failures.append(result)
            if verbose:
                print(f"[Batch]   Error: {result.message}")
        else:
            frames.append(result)

    if not frames:
        raise EmptyBatchError(f'None of the {len(names)} images in "{folder}" could be processed')

    return frames, failures


def _process_file(folder, name, width, height, thresholder) -> Union[FrameRecord, FrameFailure]:
    path = os.path.join(folder, name)
    try:
        pixels = load_pixels(path, width, height)
    except DecodeError as exc:
        return FrameFailure(name, str(exc))
    except OSError as exc:
        return FrameFailure(name, f"Cannot read {path}: {exc.strerror or exc}")

    return FrameRecord(name, thresholder.pack(pixels, width, height))
