"""
Service layer abstraction.

``product_store`` holds the key-value persistence behind products and
``product_service`` the business logic built on top of it.  API
handlers only talk to ``ProductService``; the store it uses is chosen
once when the application is created.
"""
