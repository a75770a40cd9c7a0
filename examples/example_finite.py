import numpy as np

from catpipe import UnivariateFinite, average, categorical

rng = np.random.default_rng(0)

# Observed survey answers (None = no answer)
week1 = categorical(["yes", "no", "maybe", "maybe", None, "yes"], levels=["yes", "no", "maybe"])
pool = week1[0].pool
week2 = categorical(["no", "no", "maybe"], pool=pool)

d1 = UnivariateFinite.fit(week1, rng=rng)
d2 = UnivariateFinite.fit(week2, rng=rng)
print("week 1:", d1)
print("week 2:", d2)

pooled = average([d1, d2], weights=[5, 3])
print("pooled:", pooled)
print("mode:", pooled.mode())
print("P(no):", pooled.pdf("no"))
print("draws:", [x.label for x in pooled.sample(10)])
