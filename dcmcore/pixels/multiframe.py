# Copyright 2008-2024 dcmcore authors. See LICENSE file for details.
"""Assemble the *Pixel Data* of separately decoded frames into a single
contiguous attribute.
"""

from typing import Optional

import numpy as np

from dcmcore.attribute import Attribute, OtherAttribute, new_attribute
from dcmcore.config import logger
from dcmcore.errors import DicomFormatError
from dcmcore.tag import PixelDataTag
from dcmcore.vr import VR


class MultiFramePixelData:
    """A buffer holding the pixel values of every frame of an image.

    The element width is fixed by the VR of the first frame added: **OB**
    frames are held as 8-bit values and **OW** frames as 16-bit values.

    Parameters
    ----------
    rows : int
        The number of rows in each frame.
    columns : int
        The number of columns in each frame.
    samples_per_pixel : int
        The number of samples per pixel.
    number_of_frames : int
        The number of frames to be added.

    Examples
    --------

    >>> pixels = MultiFramePixelData(2, 2, 1, 3)
    >>> for frame in frames:
    ...     pixels.add_frame(frame)
    >>> attribute = pixels.get_pixel_data_attribute()
    """

    def __init__(
        self,
        rows: int,
        columns: int,
        samples_per_pixel: int,
        number_of_frames: int
    ) -> None:
        self.elements_per_frame = rows * columns * samples_per_pixel
        self.total_elements = self.elements_per_frame * number_of_frames
        self.number_of_frames = number_of_frames
        self.frames_added = 0
        self._VR: Optional[str] = None
        self._buffer: Optional[np.ndarray] = None

    @property
    def has_byte_pixels(self) -> bool:
        """Return ``True`` if the frames added so far are **OB**."""
        return self._VR == VR.OB

    @property
    def has_word_pixels(self) -> bool:
        """Return ``True`` if the frames added so far are **OW**."""
        return self._VR == VR.OW

    def add_frame(self, pixel_data: Optional[Attribute]) -> None:
        """Copy the pixel values of the next frame into the buffer.

        Parameters
        ----------
        pixel_data : Attribute
            The frame's **OB** or **OW** *Pixel Data* attribute.

        Raises
        ------
        DicomFormatError
            If `pixel_data` is missing or isn't **OB** or **OW**, if its VR
            differs from that of the frames already added, or if it holds
            more values than fit in a frame.
        """
        if pixel_data is None:
            raise DicomFormatError("Missing Pixel Data")

        if pixel_data.VR not in (VR.OB, VR.OW):
            raise DicomFormatError(
                f"Incorrect Pixel Data VR '{pixel_data.VR}' for a frame"
            )

        if self._VR is not None and pixel_data.VR != self._VR:
            raise DicomFormatError(
                "Cannot mix OB and OW Pixel Data from different frames"
            )

        if self.frames_added >= self.number_of_frames:
            raise DicomFormatError(
                f"Unable to add more than {self.number_of_frames} frames"
            )

        if pixel_data.VR == VR.OB:
            pixels = np.frombuffer(pixel_data.get_byte_values(), dtype=np.uint8)
        else:
            pixels = pixel_data.get_short_values()

        if pixels.size > self.elements_per_frame:
            raise DicomFormatError(
                f"The frame has {pixels.size} pixel values, but frames are "
                f"only {self.elements_per_frame} values long"
            )

        if self._buffer is None:
            self._VR = pixel_data.VR
            dtype = np.uint8 if self._VR == VR.OB else np.dtype("<u2")
            self._buffer = np.zeros(self.total_elements, dtype=dtype)

        start = self.frames_added * self.elements_per_frame
        self._buffer[start:start + pixels.size] = pixels
        self.frames_added += 1
        logger.debug(
            f"Added frame {self.frames_added} of {self.number_of_frames} "
            f"({pixels.size} {self._VR} values)"
        )

    def get_pixel_data_attribute(self) -> Optional[OtherAttribute]:
        """Return the *Pixel Data* attribute for all the frames, or ``None``
        if no frames have been added.
        """
        if self._buffer is None:
            return None

        return new_attribute(PixelDataTag, self._VR, self._buffer.tobytes())
