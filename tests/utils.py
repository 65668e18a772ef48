import numpy as np
import array_api_compat as api

backends = [api.array_namespace(np.zeros(1))]

#import torch as tr
#tr.set_default_dtype(tr.float64)
#backends.append(api.array_namespace(tr.zeros(1)))

#import cupy as cp
#backends.append(api.array_namespace(cp.zeros(1)))

def rand_data(xp, *shape: int, complex_data: bool = False):
    data = np.random.rand(*shape)
    if complex_data:
        data = data + 1j * np.random.rand(*shape)
    return xp.asarray(data)

def max_diff(xp, a, b) -> float:
    return float(xp.max(xp.abs(a - b)))
