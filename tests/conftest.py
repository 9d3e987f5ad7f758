import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import pytest


@pytest.fixture
def mtcars():
    return pd.DataFrame({
        "mpg": [21.0, 22.8, 21.4, 18.7],
        "cyl": [6, 4, 6, 8],
        "disp": [160.0, 108.0, 258.0, 360.0],
        "model": ["Mazda RX4", "Datsun 710", "Hornet 4 Drive", "Hornet Sportabout"],
    })


@pytest.fixture
def scatter_figure():
    fig, ax = plt.subplots(figsize=(4, 3))
    ax.scatter(np.arange(10), np.arange(10) ** 2)
    yield fig
    plt.close(fig)


@pytest.fixture(autouse=True)
def _close_figures():
    yield
    plt.close("all")
