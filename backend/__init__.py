"""
Hadith Reader Backend

This package implements a layered, read-oriented backend for browsing a
bundled hadith corpus. Each layer communicates only through the types in
`contracts`, never through shared global state.

LAYER STRUCTURE:
================

1. INGESTION LAYER (top-level `ingestion` package)
   - Responsibility: Read corpus files, normalize records
   - Outputs: HadithCollection and Hadith contracts
   - MUST NOT: Answer queries

2. STORAGE LAYER (storage/)
   - Responsibility: Hold collections and hadiths for the process lifetime
   - Outputs: Contracts in insertion order
   - MUST NOT: Filter, search, or accept writes after loading

3. QUERY LAYER (query/)
   - Responsibility: Filter, search and paginate over the store
   - MUST NOT: Mutate the store

4. API LAYER (api/)
   - Responsibility: HTTP transport, request validation, DTO mapping
   - MUST NOT: Reach into storage except through the query layer

CONSTRAINTS ENFORCED:
=====================
- The corpus store is built once at startup and frozen
- "Not found" is an absent value in the core, a 404 at the API boundary
- Load failures are logged and reported, never fatal
"""
