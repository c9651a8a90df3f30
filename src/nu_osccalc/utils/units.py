# natural-unit conversions used by the Hamiltonians

GEV_TO_EV = 1.0e9
KM_TO_EVINV = 5.067730716e9  # eV^-1 per km (1 km / ħc in natural units)

# sqrt(2) G_F N_A (ħc)^3: matter potential in eV for rho*Ye = 1 g/cm^3
VCOEFF_EV = 7.63247e-14
