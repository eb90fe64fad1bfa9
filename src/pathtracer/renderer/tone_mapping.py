# renderer/tone_mapping.py
import numpy as np
from numba import njit

@njit
def gamma_encode_kernel(linear_image, output_image, gamma):
    """
    Encode mean linear radiance into 8-bit. NaN samples become black,
    channels are clamped to [0, 0.999] after gamma correction.
    """
    height, width, channels = linear_image.shape
    inv_gamma = 1.0 / gamma
    for y in range(height):
        for x in range(width):
            for c in range(channels):
                value = linear_image[y, x, c]
                # NaN != NaN
                if value != value or value < 0.0:
                    value = 0.0
                value = value ** inv_gamma
                if value > 0.999:
                    value = 0.999
                output_image[y, x, c] = np.uint8(int(256.0 * value))

def gamma_encode(radiance, gamma=2.0):
    """
    Gamma-encode an (h, w, 3) array of mean linear radiance to uint8.
    """
    linear = np.ascontiguousarray(radiance, dtype=np.float64)
    output = np.empty(linear.shape, dtype=np.uint8)
    gamma_encode_kernel(linear, output, float(gamma))
    return output

def reinhard_tone_mapping(accumulated, exposure=1.0, white_point=1.0, gamma=2.2):
    """
    Apply Reinhard tone mapping to a linear radiance image.
    """
    # Overflowed samples saturate to white, NaN goes black
    accumulated = np.nan_to_num(np.asarray(accumulated, dtype=np.float64), nan=0.0, posinf=1e30)
    scaled = np.maximum(accumulated, 0.0) * exposure
    mapped = scaled / (1.0 + scaled / white_point)
    mapped = mapped ** (1.0 / gamma)
    output = (mapped * 255).clip(0, 255).astype("uint8")
    return output
