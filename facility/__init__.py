"""Care facility application: residents, rooms, daily records and the donation ledger."""
