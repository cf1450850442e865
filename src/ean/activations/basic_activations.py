import autograd.numpy as np  # type: ignore
from types  import MappingProxyType
from typing import Callable, NamedTuple

class ActivationFunction(NamedTuple):
    """
    An activation function paired with its derivative.

    Both callables are vectorized (they accept scalars and numpy arrays).
    Networks evaluate the derivative at a node's signal during backprop.
    It is the slope of the unscaled function: the input scale of sigmoid,
    tanh and elu steepens the value but is not multiplied into the derivative.
    """
    name      : str
    value     : Callable
    derivative: Callable

    def __call__(self, z):
        return self.value(z)

def identity_activation(z):
    return z

def identity_derivative(z):
    return np.ones_like(z, dtype=np.float64)

# The input to sigmoid/tanh/elu is scaled up, which steepens the function.
# The scaled input is clipped to prevent under/overflow when calculating exp;
# outside the clipping range the function is flat and so is its derivative.
SIGMOID_SCALE = 5.0
TANH_SCALE    = 2.5
ELU_SCALE     = 2.5
ELU_ALPHA     = 1.0
EXP_CLIP      = 60.0

def sigmoid_activation(z):
    Z = np.clip(SIGMOID_SCALE * z, -EXP_CLIP, EXP_CLIP)
    return 1.0 / (1.0 + np.exp(-Z))

def sigmoid_derivative(z):
    Z   = SIGMOID_SCALE * z
    sig = 1.0 / (1.0 + np.exp(-np.clip(Z, -EXP_CLIP, EXP_CLIP)))
    return np.where(np.abs(Z) < EXP_CLIP, sig * (1.0 - sig), 0.0)

def tanh_activation(z):
    return np.tanh(np.clip(TANH_SCALE * z, -EXP_CLIP, EXP_CLIP))

def tanh_derivative(z):
    Z = TANH_SCALE * z
    t = np.tanh(np.clip(Z, -EXP_CLIP, EXP_CLIP))
    return np.where(np.abs(Z) < EXP_CLIP, 1.0 - t ** 2, 0.0)

def relu_activation(z):
    return np.maximum(0.0, z)

def relu_derivative(z):
    return np.where(z >= 0.0, 1.0, 0.0)

def elu_activation(z):
    Z = np.clip(ELU_SCALE * z, -EXP_CLIP, EXP_CLIP)
    return np.where(z >= 0.0, z, ELU_ALPHA * (np.exp(Z) - 1.0))

def elu_derivative(z):
    Z        = ELU_SCALE * z
    negative = np.where(Z > -EXP_CLIP, ELU_ALPHA * np.exp(np.clip(Z, -EXP_CLIP, EXP_CLIP)), 0.0)
    return np.where(z >= 0.0, 1.0, negative)

def abs_activation(z):
    return np.abs(z)

def abs_derivative(z):
    return np.where(z >= 0.0, 1.0, -1.0)

def sine_activation(z):
    return np.sin(z)

def sine_derivative(z):
    return np.cos(z)

# Gaussian with mean 0 and standard deviation 1.
# Its input is clamped to [-3.4, 3.4], beyond which the function is constant.
GAUSSIAN_MU    = 0.0
GAUSSIAN_SIGMA = 1.0
GAUSSIAN_CLIP  = 3.4

def gaussian_activation(z):
    z_clipped = np.clip(z, -GAUSSIAN_CLIP, GAUSSIAN_CLIP)
    return (1.0 / np.sqrt(2.0 * GAUSSIAN_SIGMA * np.pi)) * \
           np.exp(-(z_clipped - GAUSSIAN_MU) ** 2 / (2.0 * GAUSSIAN_SIGMA ** 2))

def gaussian_derivative(z):
    z_clipped = np.clip(z, -GAUSSIAN_CLIP, GAUSSIAN_CLIP)
    slope = gaussian_activation(z) * (GAUSSIAN_MU - z_clipped) / GAUSSIAN_SIGMA ** 2
    return np.where(np.abs(z) <= GAUSSIAN_CLIP, slope, 0.0)

# Read-only after import: genes store the name, networks resolve it once when decoded
activations = MappingProxyType({
    "identity": ActivationFunction("identity", identity_activation, identity_derivative),
    "sigmoid" : ActivationFunction("sigmoid" , sigmoid_activation , sigmoid_derivative),
    "tanh"    : ActivationFunction("tanh"    , tanh_activation    , tanh_derivative),
    "relu"    : ActivationFunction("relu"    , relu_activation    , relu_derivative),
    "elu"     : ActivationFunction("elu"     , elu_activation     , elu_derivative),
    "abs"     : ActivationFunction("abs"     , abs_activation     , abs_derivative),
    "sine"    : ActivationFunction("sine"    , sine_activation    , sine_derivative),
    "gaussian": ActivationFunction("gaussian", gaussian_activation, gaussian_derivative),
    })

# Names in a fixed order, used when picking an activation at random
activation_names = tuple(activations.keys())

# 3-letter identifiers for each activation function
activation_codes = MappingProxyType({
    "identity": "IDN",
    "sigmoid" : "SIG",
    "tanh"    : "TNH",
    "relu"    : "RLU",
    "elu"     : "ELU",
    "abs"     : "ABS",
    "sine"    : "SIN",
    "gaussian": "GAU",
    })
