# Services package init
"""
Jotter Backend — Services Layer
================================

What:  Business rules between routes (HTTP) and the store adapter.
How:   Services take a StoreAdapter plus a request schema and return response
       schemas, raising JotterError subclasses that main.py maps to HTTP.

Service Inventory:
    - NoteService: presence checks, timestamps, and list/create/update/delete
"""
