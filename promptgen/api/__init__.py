from promptgen.api.routes import router

__all__ = ["router"]
