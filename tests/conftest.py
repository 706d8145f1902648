from hypothesis import HealthCheck, settings

# Input-generation timing is environment-dependent (cold start); don't fail on it.
settings.register_profile("default", suppress_health_check=[HealthCheck.too_slow])
settings.load_profile("default")
