# Services package init
"""
LinkShelf Backend — Services Layer
====================================

What:  Business logic layer sitting between routes (HTTP) and database (persistence).
How:   Services receive the request's AsyncSession, run one statement,
       and return response models or raise application exceptions.

Service Inventory:
    - LinkService:   list/get/create/update/delete links, tags JSON handling
    - FolderService: list/create folder names, duplicate detection

Both are stateless singletons (`link_service`, `folder_service`), so tests
can call them directly with a mocked session.
"""
