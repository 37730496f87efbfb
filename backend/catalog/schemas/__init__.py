import importlib
import pkgutil

from pydantic import BaseModel, PydanticUndefinedAnnotation, PydanticUserError

__all__: list[str] = []

# Re-export every public response schema of the submodules
for module_info in pkgutil.iter_modules(__path__):
    if module_info.name.startswith("_"):
        continue

    module = importlib.import_module(f"{__name__}.{module_info.name}")
    exported = getattr(module, "__all__", ())
    globals().update({name: getattr(module, name) for name in exported})
    __all__.extend(exported)


# Page[T] and the nested movie schemas reference each other across modules
for name in __all__:
    schema = globals()[name]
    if not (isinstance(schema, type) and issubclass(schema, BaseModel)):
        continue
    try:
        schema.model_rebuild()
    except (PydanticUndefinedAnnotation, PydanticUserError) as e:
        raise RuntimeError(f"Failed to rebuild schema {name}: {e}") from e
