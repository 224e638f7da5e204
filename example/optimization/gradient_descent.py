from vmctorch.wavefunction import TrialWaveFunction
from vmctorch.sampler import ImportanceSampling
from vmctorch.solver import GradientDescent
from vmctorch.utils import set_torch_double_precision
from vmctorch.utils.plot_data import plot_energy_sweep
set_torch_double_precision()

# wave function
wf = TrialWaveFunction(ndim=3, nparticles=2)

# sampler
sampler = ImportanceSampling(nparticles=2, ndim=3, time_step=0.1)

# gradient descent from alpha = 0.1
solver = GradientDescent(wf, sampler, initial_alpha=0.1,
                         learning_rate=1E-2, niterations=100,
                         tolerance=1E-4, ncycles=2000)
obs = solver.run()

print('  Alpha     : %f' % solver.alpha)
print('  Energy    : %f +/- %f' % (obs.table.energy[-1], obs.table.error[-1]))
print('  Converged : %s' % solver.converged)

plot_energy_sweep(obs.table, e0=3.)
