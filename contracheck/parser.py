"""
Parser to extract @contract decorated functions from Python files.
"""

import ast
import inspect
import logging
import re
import textwrap
from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

from .core.models import FunctionSignature, Parameter
from .translators.annotations import AnnotationTranslator

logger = logging.getLogger(__name__)

FunctionNode = Union[ast.FunctionDef, ast.AsyncFunctionDef]
_LINE_BREAK = re.compile(r"\r\n|\r|\n")


@dataclass
class ContractedFunction:
    """A function carrying a contract, as found in source"""
    name: str
    lineno: int
    signature: FunctionSignature
    contract: str
    mutates: str = ""
    pure: bool = False
    source: str = ""
    # Position of the first character inside the string literals, when the
    # literal is plain enough to map offsets back to columns
    contract_position: Optional[Tuple[int, int]] = None
    mutates_position: Optional[Tuple[int, int]] = None


class ContractFunctionParser:
    """Parse Python source to find @contract decorated functions"""

    def __init__(self, decorator_name: str = "contract"):
        self.decorator_name = decorator_name
        self.translator = AnnotationTranslator()
        self._filename = "<string>"

    def parse_file(self, file_path: str) -> List[ContractedFunction]:
        """
        Parse a Python file and extract all @contract decorated functions.

        Raises:
            OSError: if the file cannot be read
            UnicodeDecodeError: if the file is not UTF-8
            SyntaxError: if the file is not valid Python
        """
        with open(file_path, 'r', encoding='utf-8') as f:
            source = f.read()
        return self.parse_source(source, file_path)

    def parse_source(self, source: str, filename: str = "<string>") -> List[ContractedFunction]:
        tree = ast.parse(source, filename=filename)
        self._filename = filename
        functions: List[ContractedFunction] = []
        self._collect(tree.body, source, prefix="", class_name=None, out=functions)
        logger.debug("Found %d contracted functions in %s", len(functions), filename)
        return functions

    def parse_module(self, module) -> List[ContractedFunction]:
        """
        Parse a loaded Python module to extract @contract decorated functions.

        Args:
            module: Loaded Python module

        Returns:
            List of ContractedFunction records, read from the module source
        """
        try:
            source = inspect.getsource(module)
        except (OSError, TypeError):
            logger.warning("No source available for module %s", getattr(module, "__name__", module))
            return []
        return self.parse_source(source, getattr(module, "__file__", None) or "<module>")

    def parse_signature(self, function_source: str, receiver: Optional[str] = None) -> FunctionSignature:
        """
        Signature of the first function defined in `function_source`.

        The source holds a bare function; pass `receiver` (the class name)
        when it is a method so its first parameter is treated as `self`.

        Raises:
            SyntaxError: if the source is not valid Python
            ValueError: if it defines no function
        """
        tree = ast.parse(textwrap.dedent(function_source))
        for node in tree.body:
            if isinstance(node, (ast.FunctionDef, ast.AsyncFunctionDef)):
                return self._build_signature(node, node.name, receiver)
        raise ValueError("No function definition found in source")

    def _collect(self, body: List[ast.stmt], source: str, prefix: str,
                 class_name: Optional[str], out: List[ContractedFunction]) -> None:
        for node in body:
            if isinstance(node, ast.ClassDef):
                self._collect(node.body, source, f"{prefix}{node.name}.", node.name, out)
            elif isinstance(node, (ast.FunctionDef, ast.AsyncFunctionDef)):
                info = self._extract_contracted_function(node, source, prefix, class_name)
                if info:
                    out.append(info)
                # Nested functions are never methods
                self._collect(node.body, source, f"{prefix}{node.name}.", None, out)

    def _extract_contracted_function(self, node: FunctionNode, source: str, prefix: str,
                                     class_name: Optional[str]) -> Optional[ContractedFunction]:
        """
        Extract function info if it has a @contract(...) decorator.

        Returns:
            ContractedFunction or None if not decorated
        """
        call = None
        for decorator in node.decorator_list:
            if isinstance(decorator, ast.Call) and _decorator_name(decorator.func) == self.decorator_name:
                call = decorator
                break
        if call is None:
            return None

        qualname = prefix + node.name
        value_node = call.args[0] if call.args else None
        mutates_node = None
        pure_node = None
        for keyword in call.keywords:
            if keyword.arg == "value":
                value_node = keyword.value
            elif keyword.arg == "mutates":
                mutates_node = keyword.value
            elif keyword.arg == "pure":
                pure_node = keyword.value

        contract_text = _constant(value_node, str, "")
        mutates = _constant(mutates_node, str, "")
        pure = _constant(pure_node, bool, False)
        if contract_text is None or mutates is None or pure is None:
            logger.warning("%s:%d: contract of %s is not a literal, skipping",
                           self._filename, node.lineno, qualname)
            return None

        return ContractedFunction(
            name=qualname,
            lineno=node.lineno,
            signature=self._build_signature(node, qualname, class_name),
            contract=contract_text,
            mutates=mutates,
            pure=pure,
            source=ast.get_source_segment(source, node) or "",
            contract_position=_literal_position(source, value_node, contract_text),
            mutates_position=_literal_position(source, mutates_node, mutates)
        )

    def _build_signature(self, node: FunctionNode, qualname: str,
                         class_name: Optional[str]) -> FunctionSignature:
        decorators = {_decorator_name(d) for d in node.decorator_list}
        positional = list(node.args.posonlyargs) + list(node.args.args)
        receiver = None

        if class_name is not None and "staticmethod" not in decorators:
            # self / cls is the receiver, not a slot
            positional = positional[1:]
            if "classmethod" not in decorators:
                receiver = class_name

        parameters = [
            Parameter(arg.arg, self.translator.translate(arg.annotation))
            for arg in positional + list(node.args.kwonlyargs)
        ]
        return FunctionSignature(
            name=qualname,
            parameters=parameters,
            return_type=self.translator.translate(node.returns),
            receiver=receiver
        )


def _decorator_name(node: ast.expr) -> str:
    if isinstance(node, ast.Call):
        node = node.func
    if isinstance(node, ast.Name):
        return node.id
    if isinstance(node, ast.Attribute):
        return node.attr
    return ""


def _constant(node: Optional[ast.expr], kind: type, default):
    """Literal value of `node`; default when absent, None when not a literal"""
    if node is None:
        return default
    if isinstance(node, ast.Constant) and isinstance(node.value, kind):
        return node.value
    return None


def _literal_position(source: str, node: Optional[ast.expr], value: str) -> Optional[Tuple[int, int]]:
    """(line, column) of the first character of a plain one-line string literal"""
    if node is None or not value:
        return None
    segment = ast.get_source_segment(source, node)
    if segment is None or len(segment) != len(value) + 2 or segment[1:-1] != value:
        return None
    if segment[0] not in "'\"" or segment[0] != segment[-1]:
        return None
    # col_offset counts UTF-8 bytes
    line = _LINE_BREAK.split(source)[node.lineno - 1]
    prefix = line.encode("utf-8")[:node.col_offset].decode("utf-8")
    return node.lineno, len(prefix) + 2
