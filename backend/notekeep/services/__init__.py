# Services package init
"""
NoteKeep Backend — Services Layer
===================================

What:  Business logic sitting between routes (HTTP) and the NoteStore.
Why:   Routes handle HTTP; services hold the rules and can be tested
       without a running server.

Service Inventory:
    - NoteService: create / list / update / delete plus the wow access flag
    - view_service: picks the DENIED or AUTHORIZED notes screen
    - auth_service: Google OAuth client and session identity builder
    - AccessCodeService: passthrough client for the access-code upstream
"""
