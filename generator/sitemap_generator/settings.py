SITEMAP_INDEX_FILE_NAME = "sitemap_index.xml"
SITEMAP_FILE_BASE_NAME = "sitemap"

SITEMAP_GZIP = False

LOG_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s [%(name)s] %(levelname)s: %(message)s"
