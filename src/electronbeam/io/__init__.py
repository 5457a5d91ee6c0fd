"""Image decoding and animation encoding."""

from electronbeam.io.encoder import encode_gif, encode_video
from electronbeam.io.loader import load_image, save_image
