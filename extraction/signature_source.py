"""
Signature sources: where declared parameters and comment text come from.

The extractor never locates callables itself. A source resolves a reference
to a CallableSignature or raises SignatureNotFoundError.
"""

from __future__ import annotations

import ast
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, List, Optional, Union

from .base import CallableSignature, ParameterDescriptor, SignatureNotFoundError

logger = logging.getLogger("query_extractor.signature_source")


class SignatureSource(ABC):
    """Abstract provider of callable signatures."""

    @property
    @abstractmethod
    def identity(self) -> str:
        """Stable identifier of this source, used in cache keys."""
        pass

    @abstractmethod
    def load(self, reference: str) -> CallableSignature:
        """Resolve ``reference`` or raise SignatureNotFoundError."""
        pass


class StaticSignatureSource(SignatureSource):
    """In-memory registry for hosts that already hold the signatures."""

    def __init__(self, signatures: Optional[Dict[str, CallableSignature]] = None, name: str = "static"):
        self._signatures: Dict[str, CallableSignature] = dict(signatures or {})
        self._name = name

    @property
    def identity(self) -> str:
        return f"static:{self._name}"

    def register(self, signature: CallableSignature) -> None:
        self._signatures[signature.reference] = signature

    def load(self, reference: str) -> CallableSignature:
        try:
            return self._signatures[reference]
        except KeyError:
            raise SignatureNotFoundError(reference) from None


class PythonSourceSignatureSource(SignatureSource):
    """
    Read signatures and docstrings from Python source without importing it.

    References are ``function`` or ``Class.method``.
    """

    SKIPPED_PARAMS = {"self", "cls"}

    def __init__(self, source_code: str, origin: str = "<string>"):
        self.source_code = source_code
        self.origin = origin
        self._tree: Optional[ast.Module] = None
        self._parse_failed = False

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "PythonSourceSignatureSource":
        path = Path(path)
        return cls(path.read_text(encoding="utf-8"), origin=str(path))

    @property
    def identity(self) -> str:
        return f"python:{self.origin}"

    def load(self, reference: str) -> CallableSignature:
        tree = self._parse()
        if tree is None:
            raise SignatureNotFoundError(reference, "source could not be parsed")

        node = self._find(tree, reference)
        if node is None:
            raise SignatureNotFoundError(reference)

        return CallableSignature(
            reference=reference,
            parameters=self._parameters(node),
            doc_comment=ast.get_docstring(node),
        )

    def _parse(self) -> Optional[ast.Module]:
        if self._tree is None and not self._parse_failed:
            try:
                self._tree = ast.parse(self.source_code)
            except SyntaxError as e:
                logger.warning(f"Failed to parse source code in {self.origin}: {e}")
                self._parse_failed = True
        return self._tree

    @staticmethod
    def _find(tree: ast.Module, reference: str):
        scope: List[ast.stmt] = tree.body
        parts = reference.split(".")

        for i, part in enumerate(parts):
            last = i == len(parts) - 1
            match = None
            for node in scope:
                if last and isinstance(node, (ast.FunctionDef, ast.AsyncFunctionDef)) and node.name == part:
                    match = node
                elif not last and isinstance(node, ast.ClassDef) and node.name == part:
                    match = node
            if match is None:
                return None
            if last:
                return match
            scope = match.body

        return None

    @staticmethod
    def _parameters(node) -> List[ParameterDescriptor]:
        args = node.args
        positional = list(args.posonlyargs) + list(args.args)

        # Defaults align with the tail of the positional list
        first_default = len(positional) - len(args.defaults)

        params = []
        for index, arg in enumerate(positional):
            if arg.arg in PythonSourceSignatureSource.SKIPPED_PARAMS:
                continue
            params.append(ParameterDescriptor(
                name=arg.arg,
                declared_type=PythonSourceSignatureSource._annotation_token(arg.annotation),
                optional=index >= first_default,
            ))

        for arg, default in zip(args.kwonlyargs, args.kw_defaults):
            params.append(ParameterDescriptor(
                name=arg.arg,
                declared_type=PythonSourceSignatureSource._annotation_token(arg.annotation),
                optional=default is not None,
            ))

        return params

    @staticmethod
    def _annotation_token(annotation: Optional[ast.expr]) -> Optional[str]:
        """
        Turn an annotation into a raw type token.

        - int → "int"
        - Optional[int] → "int|None"
        - int | None → "int|None"
        - Union[int, str] → "int|str"
        """
        if annotation is None:
            return None

        if isinstance(annotation, ast.Constant) and isinstance(annotation.value, str):
            # String forward reference
            try:
                annotation = ast.parse(annotation.value, mode="eval").body
            except SyntaxError:
                return annotation.value

        if isinstance(annotation, ast.Subscript):
            container = annotation.value
            container_name = container.attr if isinstance(container, ast.Attribute) else getattr(container, "id", "")
            inner = annotation.slice
            if container_name == "Optional":
                return f"{PythonSourceSignatureSource._annotation_token(inner)}|None"
            if container_name == "Union" and isinstance(inner, ast.Tuple):
                return "|".join(PythonSourceSignatureSource._annotation_token(e) or "" for e in inner.elts)

        if isinstance(annotation, ast.BinOp) and isinstance(annotation.op, ast.BitOr):
            left = PythonSourceSignatureSource._annotation_token(annotation.left)
            right = PythonSourceSignatureSource._annotation_token(annotation.right)
            return f"{left}|{right}"

        return ast.unparse(annotation)
