from vmctorch.wavefunction import TrialWaveFunction
from vmctorch.sampler import BruteForce
from vmctorch.solver import VariationSweep
from vmctorch.utils import set_torch_double_precision
from vmctorch.utils.plot_data import (plot_block, plot_correlation_coefficient,
                                      plot_energy_log)
set_torch_double_precision()

wf = TrialWaveFunction(ndim=3, nparticles=5)
sampler = BruteForce(nparticles=5, ndim=3, step_size=0.5)

solver = VariationSweep(wf, sampler, alphas=[0.3, 0.4, 0.6], ncycles=5000)
obs = solver.run()

# running averages of the energy
plot_energy_log(obs.energies, obs.table.alpha)

# correlation time of the chain
rho, tau = plot_correlation_coefficient(obs.energies)
print('  Correlation time : %f' % tau)

# error as a function of the block size
plot_block(obs.energies)
