from vmctorch.wavefunction import TrialWaveFunction
from vmctorch.sampler import BruteForce
from vmctorch.solver import VariationSweep
from vmctorch.utils import set_torch_double_precision, write_results
from vmctorch.utils.plot_data import plot_energy_sweep
set_torch_double_precision()

# one particle in a 1D harmonic trap
wf = TrialWaveFunction(ndim=1, nparticles=1)

# sampler
sampler = BruteForce(nparticles=1, ndim=1, step_size=1.)

# scan alpha = 0.1, 0.125, ..., 1.0
solver = VariationSweep(wf, sampler, nvariations=37,
                        alpha_start=0.1, alpha_step=0.025,
                        ncycles=10000, seed=1337)
obs = solver.run()

# text output
write_results(obs, 'ho1d')

# exact energy is 0.5 at alpha = 0.5
plot_energy_sweep(obs.table, e0=0.5, show_variance=True)
