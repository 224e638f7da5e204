from types import SimpleNamespace


class Accumulator:

    def __init__(self) -> None:
        """Running sums of the local energy samples.

        One sample is added after each single particle step. The sums
        of several accumulators (one per worker) are combined with `+`.

        Examples::
            >>> acc = Accumulator()
            >>> acc.add(1.5, -0.75, True)
            >>> obs = acc.finalize()
        """
        self.nsamples = 0
        self.acceptance = 0
        self.energy = 0.
        self.energy2 = 0.
        self.derivative = 0.
        self.energy_derivative = 0.

    def add(self, eloc: float, dlog: float, accepted: bool) -> None:
        """Add one sample.

        Args:
            eloc (float): local energy of the configuration
            dlog (float): d ln(Psi)/d alpha at the configuration
            accepted (bool): whether the move leading to the configuration was accepted
        """
        self.nsamples += 1
        self.acceptance += int(accepted)
        self.energy += eloc
        self.energy2 += eloc * eloc
        self.derivative += dlog
        self.energy_derivative += eloc * dlog

    def __add__(self, other: "Accumulator") -> "Accumulator":
        out = Accumulator()
        for k in out.__dict__:
            out.__dict__[k] = self.__dict__[k] + other.__dict__[k]
        return out

    def __radd__(self, other):
        # allows sum() over a list of accumulators
        if other == 0:
            return self
        return self.__add__(other)

    def finalize(self) -> SimpleNamespace:
        """Compute the statistics of the samples.

        All the sums are divided by the same number of samples. The variance
        is the variance of the total energy of the configuration.

        Raises:
            ValueError: if no sample has been accumulated

        Returns:
            SimpleNamespace: energy, energy2, variance, derivative,
                             acceptance, acceptance_rate, nsamples
        """
        if self.nsamples == 0:
            raise ValueError('No sample accumulated')

        n = float(self.nsamples)
        energy = self.energy / n
        energy2 = self.energy2 / n
        derivative = 2. * (self.energy_derivative / n
                           - energy * self.derivative / n)

        return SimpleNamespace(
            energy=energy,
            energy2=energy2,
            variance=energy2 - energy**2,
            derivative=derivative,
            acceptance=self.acceptance,
            acceptance_rate=self.acceptance / n,
            nsamples=self.nsamples)
