# ABOUTME: Barcode package: query building, search providers, and the barcode name resolver.
# ABOUTME: Entry points live in shelfie.barcode.resolver and shelfie.barcode.serp.
