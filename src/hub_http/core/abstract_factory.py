from typing import Generic, Callable, TypeVar, Hashable, ClassVar


K = TypeVar("K", bound=Hashable)
T = TypeVar("T")
TypeMap = dict[K, type[T]]


class TypeAbstractFactory(Generic[K, T]):
    """
    Generic registry that maps an enum key to the concrete class built for it.
    Each subclass gets its own registry, so MiddlewareFactory and
    TransportEngineFactory never see each other's entries.
    """

    _registry: ClassVar[TypeMap] = {}

    def __init_subclass__(cls, **kwargs) -> None:
        super().__init_subclass__(**kwargs)
        cls._registry = {}

    @classmethod
    def register(cls, key: K) -> Callable[[type[T]], type[T]]:
        """
        Decorator for registering a concrete implementation type under `key`.
        """
        def wrapper(impl: type[T]) -> type[T]:
            cls._registry[key] = impl
            return impl

        return wrapper

    @classmethod
    def list_keys(cls) -> list[K]:
        return list(cls._registry.keys())

    @classmethod
    def is_registered(cls, key: K) -> bool:
        return key in cls._registry

    @classmethod
    def create(cls, key: K, *args, **kwargs) -> T:
        try:
            impl = cls._registry[key]
        except KeyError:
            raise KeyError(f"{cls.__name__} has no implementation registered for {key!r}") from None
        return impl(*args, **kwargs)
