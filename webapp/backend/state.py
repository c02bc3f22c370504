"""The allocation engine instance shared by all routers."""
from fastapi import Request

from allocator.engine import AllocationEngine


def build_engine(**kwargs) -> AllocationEngine:
    return AllocationEngine(**kwargs)


def get_engine(request: Request) -> AllocationEngine:
    return request.app.state.engine
