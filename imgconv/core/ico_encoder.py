"""
Single-image ICO container encoder.

The container is a 6 byte ICONDIR header, one 16 byte ICONDIRENTRY and
the PNG stream of the image. All integers are little-endian.

    offset  size  field
    0       2     reserved (0)
    2       2     type (1 = icon)
    4       2     image count (1)
    6       1     width, 0 means 256
    7       1     height, 0 means 256
    8       1     palette color count (0)
    9       1     reserved (0)
    10      2     color planes (1)
    12      2     bits per pixel (32)
    14      4     resource size in bytes
    18      4     resource offset from start of file (22)
    22      ...   PNG data
"""
import struct

from imgconv.errors import WriteError
from imgconv.core.image_encoder import encode_png, BEST_COMPRESSION
from imgconv.core.pixel_buffer import buffer_size, to_image, to_rgba
from imgconv.core.resize import resize_for_ico

ICO_TYPE_ICON = 1
ICO_MAX_SIZE = 256

_DIRECTORY_FORMAT = "<HHH"
_ENTRY_FORMAT = "<BBBBHHII"

DIRECTORY_SIZE = struct.calcsize(_DIRECTORY_FORMAT)
ENTRY_SIZE = struct.calcsize(_ENTRY_FORMAT)
RESOURCE_OFFSET = DIRECTORY_SIZE + ENTRY_SIZE


def encode_dimension(pixels):
    """Encode one side of the image for the directory entry.

    The field is a single byte and 0 stands for 256, so every size of
    256 or more is written as 0.
    """
    if pixels >= ICO_MAX_SIZE:
        return 0
    return pixels


class IconDirectory:
    """ICONDIR header of an icon file."""

    def __init__(self, count=1, image_type=ICO_TYPE_ICON):
        self.reserved = 0
        self.image_type = image_type
        self.count = count

    def pack(self):
        return struct.pack(_DIRECTORY_FORMAT, self.reserved, self.image_type, self.count)


class IconDirectoryEntry:
    """ICONDIRENTRY describing the embedded image resource."""

    def __init__(self, width, height, size, offset=RESOURCE_OFFSET, bits_per_pixel=32):
        # width and height are already encoded (0 means 256)
        self.width = width
        self.height = height
        self.palette_count = 0
        self.reserved = 0
        self.color_planes = 1
        self.bits_per_pixel = bits_per_pixel
        self.size = size
        self.offset = offset

    @classmethod
    def for_resource(cls, pixel_size, resource):
        """Build the entry for an image of pixel_size whose PNG data is resource."""
        width, height = pixel_size
        return cls(encode_dimension(width), encode_dimension(height), len(resource))

    def pack(self):
        return struct.pack(
            _ENTRY_FORMAT,
            self.width,
            self.height,
            self.palette_count,
            self.reserved,
            self.color_planes,
            self.bits_per_pixel,
            self.size,
            self.offset,
        )


class IconEncoder:
    """Encodes a pixel buffer as a single-image ICO container.

    Args:
        auto_resize: Shrink images larger than max_size on either side
        normalize: Convert the pixels to RGBA before PNG encoding
        max_size: Largest side kept by auto_resize
    """

    def __init__(self, auto_resize=True, normalize=True, max_size=ICO_MAX_SIZE):
        self.auto_resize = auto_resize
        self.normalize = normalize
        self.max_size = max_size

    def prepare(self, buffer):
        """Run the auto-resize and normalization stages.

        Args:
            buffer: Pillow image or numpy array

        Returns:
            Pillow image ready for PNG encoding
        """
        if self.auto_resize:
            buffer = resize_for_ico(buffer, self.max_size)
        if self.normalize:
            return to_rgba(buffer)
        return to_image(buffer)

    def build(self, buffer):
        """Encode the buffer and build the container structures.

        Returns:
            (IconDirectory, IconDirectoryEntry, PNG bytes) tuple

        Raises:
            EncodeError: if normalization or PNG encoding fails
        """
        image = self.prepare(buffer)
        resource = encode_png(image, BEST_COMPRESSION)
        entry = IconDirectoryEntry.for_resource(buffer_size(image), resource)
        return IconDirectory(), entry, resource

    def encode(self, sink, buffer):
        """Write the ICO container for buffer to sink.

        Header, entry and PNG data are written in that order. A failed
        write leaves whatever was already written in the sink.

        Args:
            sink: Binary file-like object
            buffer: Pillow image or numpy array

        Returns:
            The IconDirectoryEntry that was written

        Raises:
            EncodeError: if normalization or PNG encoding fails
            WriteError: if the sink rejects a write
        """
        directory, entry, resource = self.build(buffer)

        try:
            sink.write(directory.pack())
        except OSError as e:
            raise WriteError(f"Failed to write ICO header: {e}") from e
        try:
            sink.write(entry.pack())
        except OSError as e:
            raise WriteError(f"Failed to write ICO directory entry: {e}") from e
        try:
            sink.write(resource)
        except OSError as e:
            raise WriteError(f"Failed to write PNG data to ICO: {e}") from e

        return entry

    def to_bytes(self, buffer):
        """Return the complete ICO container for buffer as bytes."""
        directory, entry, resource = self.build(buffer)
        return directory.pack() + entry.pack() + resource


def encode_ico(sink, buffer, auto_resize=True):
    """Write buffer to sink as an ICO file. See IconEncoder.encode."""
    return IconEncoder(auto_resize=auto_resize).encode(sink, buffer)
