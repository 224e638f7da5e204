from vmctorch.wavefunction import TrialWaveFunction
from vmctorch.sampler import ImportanceSampling
from vmctorch.solver import VariationSweep
from vmctorch.utils import set_torch_double_precision, write_results
set_torch_double_precision()

nparticles = 10

# wave function
wf = TrialWaveFunction(ndim=3, nparticles=nparticles)

# importance sampling
sampler = ImportanceSampling(nparticles=nparticles, ndim=3,
                             time_step=0.1, diffusion=0.5, with_tqdm=True)

# sweep with 4 threads sharing the cycles
solver = VariationSweep(wf, sampler, alphas=[0.3, 0.4, 0.5, 0.6, 0.7],
                        ncycles=10000, nworkers=4, ntherm=100,
                        block_size=100, output='ho3d.hdf5')
obs = solver.run()

# energies per particle, 1.5 at alpha = 0.5
write_results(obs, 'ho3d', nparticles=nparticles)
