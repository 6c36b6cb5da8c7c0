# =============================================================================
# core/config.py  -  Process-wide settings
# =============================================================================
#
# Values here are read ONCE, at import time.  main.py calls load_dotenv()
# before importing anything from core/, so a .env file in the working
# directory is honoured.
#
# QIITA_API_ACCESS_TOKEN is deliberately not validated.  If it is missing
# the upstream API answers with 401 and that surfaces as a RequestError.
# =============================================================================

import os

BASE_URL = "https://qiita.com/api/v2"
QIITA_API_ACCESS_TOKEN = os.environ.get("QIITA_API_ACCESS_TOKEN", "")
VERSION = "1.0.2"
