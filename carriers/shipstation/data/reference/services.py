"""
Service Catalog

Fixed set of services the Ship Station method can offer, in display order.
Codes follow Canada Post product codes; "Free" is the optional free
shipping service.
"""

FREE_SHIPPING_CODE = "Free"

SERVICE_LABELS = {
    "DOM.EP": "Expedited Parcel - Canada",
    "DOM.RP": "Regular Parcel - Canada",
    "USA.XP": "Xpresspost - USA",
    FREE_SHIPPING_CODE: "Free shipping",
}

# Services enabled on a new method
DEFAULT_SERVICE_CODES = list(SERVICE_LABELS)
