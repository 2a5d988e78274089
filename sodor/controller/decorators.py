"""
Controller Action Decorators

Tags for controller actions (and, for `Root`/`Private`, whole controllers).
Tags only attach metadata; nothing is registered at import time.

Example:
    class Users(Controller):
        def show(self, id): ...

        @Root()
        def list(self): ...

        @POST()
        @Alias("u/new")
        def create(self, id): ...
"""

from typing import Any, Dict, Optional, TypeVar
import inspect

from ..faults import AliasEmptyFault, AnnotationTargetFault, UnsupportedMethodFault


T = TypeVar('T')

TAGS_ATTR = '__sodor_tags__'

HTTP_METHODS = (
    'get', 'post', 'put', 'delete', 'patch',
    'options', 'head', 'trace', 'connect',
)

TAG_KINDS = ('method', 'alias', 'root', 'private', 'special', 'params')


def _own_tags(target: Any) -> Dict[str, Any]:
    """
    Return the tag dict owned by `target`, creating it if needed.

    Classes get a fresh copy of any inherited tags so that tagging a
    subclass never leaks into its base.
    """
    if inspect.isclass(target):
        if TAGS_ATTR not in target.__dict__:
            inherited = getattr(target, TAGS_ATTR, {})
            setattr(target, TAGS_ATTR, dict(inherited))
        return target.__dict__[TAGS_ATTR]

    if not hasattr(target, TAGS_ATTR):
        setattr(target, TAGS_ATTR, {})
    return getattr(target, TAGS_ATTR)


def has_tag(target: Any, kind: str) -> Optional[Any]:
    """
    Query a tag on a function or class.

    Returns:
        The tag payload, or None when the tag is absent.

    Raises:
        AnnotationTargetFault: If `target` cannot carry tags or `kind`
            is not a known tag kind.
    """
    if kind not in TAG_KINDS:
        raise AnnotationTargetFault(target, kind, reason="unknown tag kind")
    if not (inspect.isfunction(target) or inspect.isclass(target)):
        raise AnnotationTargetFault(target, kind)
    return getattr(target, TAGS_ATTR, {}).get(kind)


class Tag:
    """
    Base action tag.

    Subclasses set `kind` and, where needed, a payload. Applying a tag
    stores `payload` under `kind` in the target's tag dict.
    """

    kind: str = ''
    class_level: bool = False

    def __init__(self, payload: Any = True):
        self.payload = payload

    def __call__(self, target: T) -> T:
        if inspect.isclass(target):
            if not self.class_level:
                raise AnnotationTargetFault(
                    target, self.kind, reason="tag only applies to actions"
                )
        elif not inspect.isfunction(target):
            raise AnnotationTargetFault(target, self.kind)

        _own_tags(target)[self.kind] = self.payload
        return target

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.payload!r})"


class Method(Tag):
    """Declare the HTTP verb an action answers to (default: get)."""

    kind = 'method'

    def __init__(self, method: str):
        verb = method.lower() if isinstance(method, str) else method
        if verb not in HTTP_METHODS:
            raise UnsupportedMethodFault(method, HTTP_METHODS)
        super().__init__(verb)

    @property
    def method(self) -> str:
        return self.payload


class Alias(Tag):
    """Extra path patterns for an action, e.g. Alias("u/new", "people/add")."""

    kind = 'alias'

    def __init__(self, *paths: str):
        if not paths:
            raise AliasEmptyFault()
        super().__init__(tuple(paths))

    @property
    def alias(self) -> tuple:
        return self.payload


class Root(Tag):
    """Root actions answer on the controller's base path itself."""

    kind = 'root'
    class_level = True

    def __init__(self):
        super().__init__(True)


class Private(Tag):
    """
    Private actions generate no routes.

    They stay callable from other actions of the same controller.
    """

    kind = 'private'
    class_level = True

    def __init__(self):
        super().__init__(True)


class Special(Tag):
    """Suppress the default /base/action route; root and alias routes remain."""

    kind = 'special'

    def __init__(self):
        super().__init__(True)


class Params(Tag):
    """Declare the ordered parameter names explicitly instead of introspecting."""

    kind = 'params'

    def __init__(self, *names: str):
        super().__init__(tuple(names))


class GET(Method):
    """GET request decorator."""

    def __init__(self):
        super().__init__('get')


class POST(Method):
    """POST request decorator."""

    def __init__(self):
        super().__init__('post')


class PUT(Method):
    """PUT request decorator."""

    def __init__(self):
        super().__init__('put')


class DELETE(Method):
    """DELETE request decorator."""

    def __init__(self):
        super().__init__('delete')


class PATCH(Method):
    """PATCH request decorator."""

    def __init__(self):
        super().__init__('patch')


class OPTIONS(Method):
    """OPTIONS request decorator."""

    def __init__(self):
        super().__init__('options')


class HEAD(Method):
    """HEAD request decorator."""

    def __init__(self):
        super().__init__('head')


class TRACE(Method):
    """TRACE request decorator."""

    def __init__(self):
        super().__init__('trace')


class CONNECT(Method):
    """CONNECT request decorator."""

    def __init__(self):
        super().__init__('connect')

