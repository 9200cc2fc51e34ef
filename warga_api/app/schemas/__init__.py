"""
Pydantic schema definitions for API payloads.

Field names follow the public API (``namaWarga``, ``jumlahAnggota``);
the storage gateway maps them to column names.  Request models are
deliberately permissive so that the services, not pydantic, decide
which inputs are invalid and report them as HTTP 400.
"""
