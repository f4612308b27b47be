# Services package init
"""
NeoLayer Store API — Services Layer
====================================

What:  Store logic sitting between routes (HTTP) and MongoDB (persistence).
How:   Each service is stateless and receives the collection it works on as
       an argument; routes pull collections from the injected StoreContext.

Service Inventory:
    - ProductService:  list / create / update / delete products
    - OrderService:    create / list / filter by status / update status / delete
    - SettingsService: bootstrap default, read, update theme (upsert)
    - storage_operation: translates driver failures into StorageError
"""
