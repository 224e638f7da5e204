from vmctorch.wavefunction import make_wavefunction
from vmctorch.sampler import BruteForce
from vmctorch.solver import VariationSweep
from vmctorch.utils import set_torch_double_precision, write_results
set_torch_double_precision()

nparticles = 10

# hard sphere bosons in an elliptical trap
wf = make_wavefunction(ndim=3, nparticles=nparticles, beta=2.82843,
                       interaction=True, radius=0.0043)

sampler = BruteForce(nparticles=nparticles, ndim=3, step_size=0.5)

solver = VariationSweep(wf, sampler, alphas=[0.45, 0.475, 0.5, 0.525, 0.55],
                        ncycles=5000, ntherm=500, nworkers=2)
obs = solver.run()
write_results(obs, 'elliptical', nparticles=nparticles)
