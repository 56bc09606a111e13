import torch

_FINFO = torch.finfo(torch.float64)

EPSILON: float = _FINFO.eps
MIN_NORMAL: float = _FINFO.tiny
