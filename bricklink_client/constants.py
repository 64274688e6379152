"""Static endpoints used by the BrickLink client."""

DEFAULT_BASE_URL = "https://api.bricklink.com/api/store/v1/"
PART_OUT_URL = "https://www.bricklink.com/catalogPOV.asp"

IMAGE_HOST = "img.bricklink.com"
PART_IMAGE_PATH = "ItemImage/PN/{color_id}/{number}.png"
MINIFIG_IMAGE_PATH = "ItemImage/MN/0/{number}.png"
SET_IMAGE_PATH = "ItemImage/SN/0/{number}.png"
