import warnings
from types import SimpleNamespace
from typing import Any, Dict, Iterable, Optional, Tuple

import h5py
import numpy as np
import torch


def dump_to_hdf5(obj: Any, fname: str, root_name: Optional[str] = None) -> None:
    """Write a namespace of results in a hdf5 file.

    Nested namespaces and dicts become groups, arrays tensors and scalars
    become datasets. Attributes starting with an underscore and None
    values are skipped. A group already present under ``root_name`` is
    replaced.

    Args:
        obj (Any): results to write, usually a SimpleNamespace
        fname (str): hdf5 filename, created if needed
        root_name (str, optional): name of the top group. Defaults to the class name of obj.
    """
    if root_name is None:
        root_name = obj.__class__.__name__

    with h5py.File(fname, 'a') as h5:
        _write(obj, h5, root_name)


def load_from_hdf5(obj: Any, fname: str, obj_name: str) -> Any:
    """Read a group of a hdf5 file back as attributes of obj.

    Subgroups are loaded as SimpleNamespace attributes and string
    datasets are decoded.

    Args:
        obj (Any): object receiving the data
        fname (str): hdf5 filename
        obj_name (str): name of the group to read

    Returns:
        Any: obj with the new attributes
    """
    with h5py.File(fname, 'r') as h5:
        _read(h5[obj_name], obj)
    return obj


def add_group_attr(filename: str, grp_name: str, attr: Dict[str, Any]) -> None:
    """Tag a group with metadata, e.g. the solver type.

    Args:
        filename (str): hdf5 filename
        grp_name (str): name of an existing group
        attr (dict): attribute names and values
    """
    with h5py.File(filename, 'a') as h5:
        h5[grp_name].attrs.update(attr)


def _is_container(obj: Any) -> bool:
    if isinstance(obj, (torch.Tensor, np.ndarray)):
        return False
    return hasattr(obj, '__dict__') or hasattr(obj, 'keys')


def _items(obj: Any) -> Iterable[Tuple[str, Any]]:
    if hasattr(obj, '__dict__'):
        return vars(obj).items()
    return obj.items()


def _write(obj: Any, parent: h5py.Group, name: str) -> None:
    """Write obj under parent, as a group or as a dataset."""
    if name.startswith('_') or obj is None:
        return

    if name in parent:
        del parent[name]

    if _is_container(obj):
        grp = parent.create_group(name)
        for child_name, child in _items(obj):
            _write(child, grp, child_name)
        return

    if isinstance(obj, torch.Tensor):
        obj = obj.detach().cpu().numpy()
    elif isinstance(obj, (list, tuple)):
        obj = np.asarray(obj)

    # h5py has no numpy unicode type
    if isinstance(obj, np.ndarray) and obj.dtype.kind == 'U':
        obj = obj.astype('S')

    try:
        parent.create_dataset(name, data=obj)
    except (TypeError, ValueError):
        warnings.warn('could not write %s of type %s in the hdf5 file' %
                      (name, type(obj).__name__))


def _read(grp: h5py.Group, obj: Any) -> None:
    """Copy the content of grp on the attributes of obj."""
    for name, item in grp.items():
        if isinstance(item, h5py.Group):
            if not hasattr(obj, name):
                setattr(obj, name, SimpleNamespace())
            _read(item, getattr(obj, name))
        elif h5py.check_string_dtype(item.dtype) is not None:
            setattr(obj, name, item.asstr()[()])
        else:
            setattr(obj, name, item[()])
