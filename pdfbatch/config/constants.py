"""Constants for pdfbatch."""

from pathlib import Path

# Application constants
APP_NAME = "pdfbatch"

# Default paths
DEFAULT_INPUT_DIR = "generated-documents"
DEFAULT_OUTPUT_DIR = "generated-documents-pdf"
DEFAULT_LOG_DIR = ".logs"
DEFAULT_CONFIG_FILE = "pdfbatch.yaml"
DEFAULT_ADOBE_ENV_FILE = ".env.adobe"

# Config file locations (in order of priority)
USER_CONFIG_FILE = Path.home() / ".config" / APP_NAME / "config.yaml"

CONFIG_LOCATIONS = [
    Path.cwd() / DEFAULT_CONFIG_FILE,
    USER_CONFIG_FILE,
]

# Source extensions and the content format each maps to
SUPPORTED_EXTENSIONS = {
    ".md": "markdown",
    ".markdown": "markdown",
    ".txt": "text",
    ".html": "html",
    ".htm": "html",
}

# Extensions scanned when nothing else is configured
DEFAULT_EXTENSIONS = [".md", ".txt", ".html"]

# Rendering methods, in default priority order
RENDER_METHODS = ["playwright", "adobe"]

# Existing-output policies
ON_EXISTING_POLICIES = ["skip", "overwrite", "newer"]

# Batch defaults
DEFAULT_CHUNK_SIZE = 3

# Page layout
DEFAULT_PAGE_FORMAT = "A4"
DEFAULT_PAGE_MARGIN = "1in"
DEFAULT_PAGE_TIMEOUT_MS = 30000

# Page sizes in inches, used by the Adobe HTML-to-PDF job
PAGE_SIZES_INCHES = {
    "A4": (8.27, 11.69),
    "A3": (11.69, 16.54),
    "Letter": (8.5, 11.0),
    "Legal": (8.5, 14.0),
}

# Adobe PDF Services
ADOBE_CLIENT_ID_ENV = "PDF_SERVICES_CLIENT_ID"
ADOBE_CLIENT_SECRET_ENV = "PDF_SERVICES_CLIENT_SECRET"
DEFAULT_ADOBE_TOKEN_URL = "https://ims-na1.adobelogin.com/ims/token/v3"
DEFAULT_ADOBE_API_BASE_URL = "https://pdf-services.adobe.io"
DEFAULT_ADOBE_SCOPE = "openid,AdobeID,DCAPI"
DEFAULT_ADOBE_POLL_INTERVAL = 2.0
DEFAULT_ADOBE_MAX_POLLS = 60
DEFAULT_ADOBE_TIMEOUT = 60.0

# Suffix for PDFs still being written
PARTIAL_SUFFIX = ".part"
