"""
Use Cases Layer (Business Operations)

Structure
---------
usecases/
├── auth/       # Signup, login, user listing
├── orders/     # Checkout, listings, cancel / deliver transitions
└── products/   # Public catalog and owner-scoped product management

Import from subpackages:

    from storefront.application.usecases.orders import CancelOrderUseCase
"""
