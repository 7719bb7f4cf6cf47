"""
Chaos diagnostics for the Lorenz system.

Computes the maximum Lyapunov exponent, the full spectrum, the Kaplan-Yorke
dimension and a z = 27 Poincaré section, and compares against reference values.
"""

from __future__ import annotations
import numpy as np

from dynmodels import (
    kaplan_yorke_dimension,
    lyapunov_exponent,
    lyapunov_spectrum,
    poincare_map_2d,
    solve_trajectory,
    correlation_dimension,
)


def lorenz(t, x, sigma=10.0, rho=28.0, beta=8.0 / 3.0):
    return np.array([
        sigma * (x[1] - x[0]),
        x[0] * (rho - x[2]) - x[1],
        x[0] * x[1] - beta * x[2],
    ])


# 1. Settings
# -----------
x0 = [1.0, 1.0, 1.0]
dt = 0.01
time_step = 0.1
warmup = 200
n_iterations = 2000

# 2. Lyapunov analysis
# --------------------
print(f"Computing MLE (time_step={time_step}, dt={dt}, {n_iterations} iterations)...")
mle = lyapunov_exponent(lorenz, x0, time_step, dt, warmup, n_iterations, rng=0)

print("Computing Lyapunov spectrum (3 exponents)...")
spectrum = lyapunov_spectrum(lorenz, x0, time_step, dt, warmup, n_iterations)
d_ky = kaplan_yorke_dimension(spectrum)

# 3. Poincaré section z = 27 and correlation dimension of the attractor
# ----------------------------------------------------------------------
xs, ys = poincare_map_2d(lorenz, x0, (0, 1), [0, 0, 1], [0, 0, 27], t_max=200.0, dt=dt,
                         direction="positive")
_, traj = solve_trajectory(lorenz, x0, t_max=100.0, dt=dt)
_, _, d2 = correlation_dimension(traj[2000::4], r_min=0.5, r_max=10.0, n_r=20)

# 4. Results
# ----------
ref = np.array([0.9056, 0.0, -14.5723])

print("\n" + "=" * 60)
print("RESULTS")
print("=" * 60)
print(f"\nMLE:              {mle:.4f}   (reference {ref[0]:.4f})")
for i, (calc, r) in enumerate(zip(spectrum, ref)):
    print(f"lambda_{i + 1}:         {calc:+.4f}  (reference {r:+.4f})")
print(f"sum:              {spectrum.sum():+.4f}  (divergence {-(10.0 + 8.0 / 3.0 + 1.0):+.4f})")
print(f"Kaplan-Yorke dim: {d_ky:.4f}   (reference 2.06)")
print(f"Correlation dim:  {d2:.4f}   (reference 2.05)")
print(f"Poincaré points:  {xs.size}")
