# Services package init
"""
Stockroom Backend — Services Layer
====================================

What:  Business logic between routes (HTTP) and the database (persistence).

Service Inventory:
    - UserService:     users, role whitelist, password rules, acting-user check
    - CategoryService: categories, name uniqueness, in-use delete guard
    - ProductService:  products, category reference, price/quantity rules
    - common:          required-field checks and DB error translation

Each service module exposes a stateless singleton (`user_service`, ...) that
routes import directly; the request's AsyncSession is passed per call.
"""
