"""
Списки селекторов для разбора витрины.

Разметка магазина заранее неизвестна, поэтому для каждого поля задан
упорядоченный список селекторов распространённых шаблонов e-commerce.
Порядок в кортеже = приоритет.
"""

PRODUCT_CONTAINER_SELECTORS = (
    ".product",
    ".product-item",
    ".product-thumb",
    '[data-entity="item"]',
)

TITLE_SELECTORS = (
    ".product-name a",
    ".product-title",
    ".product__title",
)

PRICE_SELECTORS = (
    ".price",
    ".product-price",
    ".product__price",
    '[itemprop="price"]',
)

AVAILABILITY_SELECTORS = (
    ".status",
    ".product-stock",
    ".product__availability",
    ".product-availability",
)

# Сначала lazy-load атрибуты, затем src, затем srcset
IMAGE_ATTRIBUTES = (
    "data-src",
    "data-original",
    "data-lazy",
    "data-large_image",
    "data-large-image",
    "data-image",
    "src",
    "data-srcset",
    "srcset",
)

IMAGE_EXTENSIONS = (".jpg", ".jpeg", ".png", ".webp", ".gif")

CATEGORY_HREF_PATTERN = r"catalog|product|collection"
CATEGORY_MIN_TEXT_LENGTH = 3
