# ABOUTME: shelfie - metadata resolution for a physical media shelf inventory.
# ABOUTME: Catalog lookups by name and type, and barcode to product name resolution.
