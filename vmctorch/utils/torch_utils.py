import torch
from torch.autograd import grad


def set_torch_double_precision() -> None:
    """Set the default precision to double for all torch tensors."""
    torch.set_default_dtype(torch.float64)
    torch.backends.cuda.matmul.allow_tf32 = False
    torch.backends.cudnn.allow_tf32 = False


def set_torch_single_precision() -> None:
    """Set the default precision to single for all torch tensors."""
    torch.set_default_dtype(torch.float32)
    torch.backends.cuda.matmul.allow_tf32 = False
    torch.backends.cudnn.allow_tf32 = False


def gradients(out: torch.Tensor, inp: torch.Tensor) -> torch.Tensor:
    """
    Return the gradients of out wrt inp

    Args:
        out (torch.Tensor): The output tensor
        inp (torch.Tensor): The input tensor

    Returns:
        torch.Tensor: Gradient of out wrt inp
    """
    gval = grad(out, inp, grad_outputs=torch.ones_like(out))[0]
    return gval.detach()


def laplacian(out: torch.Tensor, inp: torch.Tensor) -> torch.Tensor:
    """Return the laplacian of a scalar `out` with respect to all the elements of `inp`.

    Args:
        out (torch.Tensor): scalar output tensor
        inp (torch.Tensor): input tensor, requires grad

    Returns:
        torch.Tensor: trace of the Hessian
        torch.Tensor: gradients of `out` with respect to `inp`
    """
    # compute the jacobian
    jacob = grad(
        out, inp, grad_outputs=torch.ones_like(out), only_inputs=True, create_graph=True
    )[0]

    # compute the diagonal element of the Hessian
    flat = jacob.reshape(-1)
    hess = torch.zeros_like(out)

    for idim in range(flat.shape[0]):
        tmp = grad(flat[idim], inp, only_inputs=True, retain_graph=True)[0]
        hess = hess + tmp.reshape(-1)[idim]

    return hess.detach(), jacob.detach()
