from datetime import datetime
import inspect
from functools import wraps

from rdkit.Chem.rdchem import Mol

from molparent import config


def _fmt(val):
    """Short representation of a tool argument or result for the history log."""
    if isinstance(val, Mol):
        return f"<Mol atoms={val.GetNumAtoms()}>"
    if isinstance(val, str):
        return val if len(val) <= 100 else val[:97] + "..."
    if hasattr(val, "shape"):  # DataFrame
        return f"<Table shape={val.shape}>"
    if isinstance(val, (list, dict, tuple, set)) and len(val) > 30:
        return f"<{type(val).__name__} len={len(val)}>"
    try:
        return repr(val)
    except Exception:
        return "<unprintable>"


def _write_entry(func_name: str, description: str, inputs: dict, outputs, elapsed: float) -> None:
    entry = (
        datetime.now().strftime("\n%Y-%m-%d %H:%M:%S:\n")
        + f"\tFunction: {func_name}()\n"
        + f"\tDescription: {description}\n"
        + f"\tInputs: {inputs}\n"
        + f"\tOutputs: {outputs}\n"
        + f"\tExecution Time: {elapsed:.4f}s\n"
    )
    with config.LOG_PATH.open("a", encoding="utf-8") as f:
        f.write(entry)


def loggable(func):
    """
    Decorator recording every standardization tool call in the history log:
      - function name and first docstring line
      - inputs as passed in
      - outputs (or the exception that was raised)
      - execution time

    Entries are appended to config.LOG_PATH in a human-readable multiline format.
    """
    sig = inspect.signature(func)
    doc = inspect.getdoc(func)
    description = doc.strip().split("\n")[0] if doc else "Description not available."

    @wraps(func)
    def wrapper(*args, **kwargs):
        bound = sig.bind(*args, **kwargs)
        bound.apply_defaults()
        inputs = {k: _fmt(v) for k, v in bound.arguments.items()}

        start = datetime.now()
        try:
            result = func(*args, **kwargs)
        except Exception as e:
            elapsed = (datetime.now() - start).total_seconds()
            _write_entry(func.__name__, description, inputs, f"<raised {type(e).__name__}: {e}>", elapsed)
            raise
        elapsed = (datetime.now() - start).total_seconds()

        if isinstance(result, dict):
            outputs = {k: _fmt(v) for k, v in result.items()}
        else:
            outputs = _fmt(result)
        _write_entry(func.__name__, description, inputs, outputs, elapsed)

        return result

    return wrapper
