# ABOUTME: Barcode normalization and web search query construction.
# ABOUTME: Restricts searches to retailer and catalog sites likely to carry clean product titles.

import re

_NON_DIGIT_RE = re.compile(r"\D")

# Retailers and catalogs whose page titles tend to be clean product names.
SEARCH_SITES = (
    "allocine.fr",
    "amazon.fr",
    "auchan.fr",
    "boulanger.fr",
    "carrefour.fr",
    "cdiscount.com",
    "chapitre.com",
    "cultura.com",
    "darty.com",
    "decitre.fr",
    "deezer.com",
    "discogs.com",
    "dvdfr.com",
    "e.leclerc",
    "ebay.fr",
    "espritjeu.com",
    "filmcomplet.fr",
    "fnac.com",
    "furet.com",
    "gibert.com",
    "grosbill.com",
    "jeuxvideo.com",
    "ldlc.com",
    "leboncoin.fr",
    "librairiesindependantes.com",
    "ludifolie.com",
    "micromania.fr",
    "philibert.fr",
    "placedeslibraires.fr",
    "qobuz.com",
    "rakuten.fr",
    "rueducommerce.fr",
    "trictrac.net",
)


def normalize_barcode(raw: str | None) -> str:
    """Strip every non-digit character. An empty result means "no barcode"."""
    if not raw:
        return ""
    return _NON_DIGIT_RE.sub("", raw)


def build_search_query(barcode: str) -> str:
    """Build ``"<digits> (site:a OR site:b ...)"`` over :data:`SEARCH_SITES`."""
    site_filters = " OR ".join(f"site:{site}" for site in SEARCH_SITES)
    return f"{normalize_barcode(barcode)} ({site_filters})"
