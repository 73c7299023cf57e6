# File location: data/synthetic/generate_data.py

"""Generate the XOR toy classification set used by the examples."""

import jax.random as jr
import numpy as np
import pandas as pd
from pathlib import Path

from bnn_layout.datasets import make_xor_clusters


def save_datasets(seed=42, n_samples=80):
    """Generate and save the XOR clusters as .npz and .csv."""
    key = jr.PRNGKey(seed)
    data_dir = Path(__file__).parent
    data_dir.mkdir(exist_ok=True)

    X, y = make_xor_clusters(key, n_samples=n_samples)
    np.savez(data_dir / 'xor_clusters.npz', X=X, y=y)

    df = pd.DataFrame(np.array(X), columns=['x1', 'x2'])
    df['label'] = np.array(y).astype(int)
    df.to_csv(data_dir / 'xor_clusters.csv', index=False)

    print(f"Saved {len(df)} points to {data_dir}")


if __name__ == "__main__":
    save_datasets()
