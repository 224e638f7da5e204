"""Utils module API."""

from .hdf5_utils import (
    add_group_attr,
    dump_to_hdf5,
    load_from_hdf5,
)

from .output_utils import (
    write_statistics,
    write_energies,
    write_results,
    load_statistics,
    load_energies,
)

from .stat_utils import (
    blocking,
    sampling_error,
    correlation_coefficient,
    integrated_autocorrelation_time,
    fit_correlation_coefficient,
)

from .torch_utils import (
    set_torch_double_precision,
    set_torch_single_precision,
    gradients,
    laplacian,
)

__all__ = [
    "set_torch_double_precision",
    "set_torch_single_precision",
    "add_group_attr",
    "dump_to_hdf5",
    "load_from_hdf5",
    "write_statistics",
    "write_energies",
    "write_results",
    "load_statistics",
    "load_energies",
    "gradients",
    "laplacian",
    "blocking",
    "sampling_error",
    "correlation_coefficient",
    "integrated_autocorrelation_time",
    "fit_correlation_coefficient",
]
