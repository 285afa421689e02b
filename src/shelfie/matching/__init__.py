# ABOUTME: Text matching package: edit distance, segment scoring, and product name reduction.
# ABOUTME: Pure functions with no I/O, shared by the catalog and barcode resolvers.

from shelfie.matching.product_name import extract_product_name
from shelfie.matching.similarity import closest_match, distance, similarity_score

__all__ = [
    "closest_match",
    "distance",
    "extract_product_name",
    "similarity_score",
]
