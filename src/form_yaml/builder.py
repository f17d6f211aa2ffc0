"""Node builder: folds finished records into the document."""

from __future__ import annotations

from .context import ContextStack
from .model import NodeRecord, Opening, Scalar, Value
from .scalars import coerce_scalar


def consume(record: NodeRecord, stack: ContextStack) -> None:
    """Integrate *record* into the live collections on *stack*.

    Opening records push a new, still unresolved level; all other records
    store their final value in the level matching their depth.
    """
    stack.settle(record)
    collector = stack.collector_for(record)

    if isinstance(record.value, Opening):
        sub = record.value.new_collector()
        if isinstance(collector, list):
            selector = len(collector)
            collector.append(sub)
        else:
            selector = record.name
            collector[selector] = sub
        stack.open(selector, sub)
        return

    value = finalize(record)
    if isinstance(collector, list):
        collector.append(value)
    else:
        collector[record.name] = value


def finalize(record: NodeRecord) -> Value:
    """Return the value *record* stores: block text, quoted or coerced text."""
    if record.block is not None:
        return record.block.text()
    scalar = record.value
    if not isinstance(scalar, Scalar):
        raise TypeError(f"record has no scalar value: {record!r}")
    if scalar.quoted:
        return scalar.text
    return coerce_scalar(scalar.text)
