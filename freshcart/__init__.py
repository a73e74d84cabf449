"""FreshCart storefront: cart, wishlist, checkout and orders."""

__version__ = "1.0.0"
