import importlib
import inspect
import logging
import os
import re
from glob import glob
from types import FunctionType, ModuleType
from typing import Any, Callable, Collection, Iterable, List

log = logging.getLogger(__name__)

SRC_DIR = os.path.abspath(
    os.path.join(os.path.dirname(__file__), os.pardir, os.pardir, "src")
)


class DocValidator:
    """
    Validates the docstrings of all public classes and functions of the packages
    in a source directory.
    """

    root_dir: str

    classes_with_missing_doc: List[str]
    functions_with_missing_doc: List[str]
    functions_with_mismatched_parameter_doc: List[str]

    #: protected members which are validated nonetheless
    VALIDATE_PROTECTED = ("__init__",)

    def __init__(self, root_dir: str) -> None:
        self.root_dir = root_dir

        self.classes_with_missing_doc = []
        self.functions_with_missing_doc = []
        self.functions_with_mismatched_parameter_doc = []

    def validate_docstrings(self) -> bool:
        modules = self._load_modules()

        if not modules:
            raise ValueError(f"no Python modules found in {self.root_dir}")

        for module in modules:
            self._validate_members(
                module_name=module.__name__,
                members=[
                    getattr(module, name)
                    for name in dir(module)
                    if not name.startswith("_")
                ],
            )

        def lines(s: Iterable[str]) -> str:
            return "\n".join(s)

        for issues, message in (
            (self.classes_with_missing_doc, "One or more classes lack docstrings"),
            (self.functions_with_missing_doc, "One or more functions lack docstrings"),
            (
                self.functions_with_mismatched_parameter_doc,
                "One or more functions have mismatched parameter documentation",
            ),
        ):
            if issues:
                log.warning(f"{message}:\n{lines(issues)}")

        return not (
            self.classes_with_missing_doc
            or self.functions_with_missing_doc
            or self.functions_with_mismatched_parameter_doc
        )

    @staticmethod
    def is_docstring_missing(obj: Any) -> bool:
        """
        Check if the docstring of an object is missing or empty.

        :param obj: the object to check
        :return: ``True`` if the docstring is missing; ``False`` otherwise
        """
        doc = getattr(obj, "__doc__", None)
        return not (doc and str(doc).strip())

    @staticmethod
    def is_parameter_doc_mismatched(
        module_name: str, callable_obj: Callable[..., Any]
    ) -> bool:
        """
        Check if the parameters in the signature of a callable are inconsistent with
        the parameters in its docstring.

        :param module_name: the name of the module the callable appears in
        :param callable_obj: the callable to check
        :return: ``True`` if inconsistent; ``False`` otherwise
        """
        documented_parameters = DocValidator.list_documented_parameters(
            str(callable_obj.__doc__)
        )
        actual_parameters = DocValidator.list_actual_parameters(callable_obj)

        if actual_parameters == documented_parameters:
            return False

        log.warning(
            "Mismatched arguments in docstring for "
            f"{module_name}.{callable_obj.__qualname__}: "
            f"expected {actual_parameters} but got {documented_parameters}"
        )
        return True

    @staticmethod
    def list_documented_parameters(docstring: str) -> List[str]:
        """
        Extract all documented parameter names from a docstring, including ``return``
        if the return value is documented.

        :param docstring: the docstring
        :return: the list of parameter names
        """
        return [
            param or return_
            for param, return_ in re.findall(
                pattern=r"\:param\s+(\w+)\s*\:|\:(return)s?:",
                string=docstring,
                flags=re.MULTILINE,
            )
        ]

    @staticmethod
    def list_actual_parameters(callable_obj: Callable[..., Any]) -> List[str]:
        """
        Extract all parameter names from the signature of a callable, including
        ``return`` if the return annotation is not ``None``.

        :param callable_obj: the callable
        :return: the list of parameter names
        """
        signature = inspect.signature(callable_obj)
        actual_parameters = [
            name for name in signature.parameters if name not in ("self", "cls")
        ]
        if not (
            signature.return_annotation is signature.empty
            # resolved forward references turn None into NoneType
            or signature.return_annotation in (None, type(None))
        ):
            actual_parameters.append("return")
        return actual_parameters

    def _validate_members(self, module_name: str, members: Collection[Any]) -> None:
        def full_name(obj: Any) -> str:
            return f"{module_name}.{obj.__qualname__}"

        classes = [cls for cls in members if isinstance(cls, type)]
        functions = [func for func in members if isinstance(func, FunctionType)]

        self.classes_with_missing_doc.extend(
            full_name(cls) for cls in classes if self.is_docstring_missing(cls)
        )

        # __init__ shares its docstring with the class
        self.functions_with_missing_doc.extend(
            full_name(func)
            for func in functions
            if self.is_docstring_missing(func) and func.__name__ != "__init__"
        )

        self.functions_with_mismatched_parameter_doc.extend(
            full_name(func)
            for func in functions
            if not self.is_docstring_missing(func)
            and self.is_parameter_doc_mismatched(
                module_name=module_name, callable_obj=func
            )
        )

        for cls in classes:
            self._validate_members(
                module_name=module_name,
                members=[
                    attribute
                    for name, attribute in vars(cls).items()
                    if self._is_validated(name)
                ],
            )

    def _is_validated(self, name: str) -> bool:
        return name in self.VALIDATE_PROTECTED or not name.startswith("_")

    def _load_modules(self) -> List[ModuleType]:
        # import all public modules found in the root directory
        module_paths = (
            os.path.splitext(os.path.relpath(path, self.root_dir))[0]
            .replace(os.sep, ".")
            .replace(".__init__", "")
            for path in glob(os.path.join(self.root_dir, "**", "*.py"), recursive=True)
        )

        return [
            importlib.import_module(module_path)
            for module_path in module_paths
            if self._is_validated(module_path.rsplit(".", 1)[-1])
        ]


def test_docstrings() -> None:
    assert DocValidator(root_dir=SRC_DIR).validate_docstrings(), "docstrings are valid"


def test_return_documentation() -> None:
    def _f(x: int) -> None:
        pass

    def _g(x: int) -> int:
        return x

    assert DocValidator.list_actual_parameters(_f) == ["x"]
    assert DocValidator.list_actual_parameters(_g) == ["x", "return"]

    # annotations resolved by the all tracker
    _f.__annotations__["return"] = type(None)
    assert DocValidator.list_actual_parameters(_f) == ["x"]
