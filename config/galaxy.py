"""Configuration for the procedural spiral galaxy viewer."""

WINDOW = {
    "width": 1280,
    "height": 720,
    "title": "Spiral Galaxy"
}

CAMERA = {
    "fov": 75.0,
    "near_clip": 0.1,
    "far_clip": 100.0,
    # Spherical form of the (3, 5, 5) start position
    "initial_radius": 7.681,
    "initial_theta": 59.04,
    "initial_phi": 40.6,
    "min_radius": 0.5,
    "max_radius": 50.0,
    "min_phi": -89.0,
    "max_phi": 89.0,
    "keyboard_rotate_speed": 60.0,
    "keyboard_zoom_speed": 5.0,
    "mouse_sensitivity": 0.3,
    "damping_factor": 0.05,        # OrbitControls-style, per 60 Hz frame
    "zoom_smoothing": 8.0,
}

# Starting parameter values. The intro animation grows radius and count from 0.
GALAXY = {
    "particle_size": 0.001,
    "particle_count": 0,
    "galaxy_radius": 0.0,
    "branch_count": 3,
    "spin_angle_coefficient": 1.0,
    "randomness_spread": 0.2,
    "randomness_power": 3.0,
    "inside_color": "#ff6030",
    "outside_color": "#1b3984",
    "seed": None,                  # None = fresh entropy on every launch
}

# Panel ranges. These bound the UI only; the store enforces the hard limits.
PARAMETERS = {
    "particle_count": {"label": "Particle Count", "folder": "Particles",
                       "min": 0, "max": 10000, "step": 1},
    "particle_size": {"label": "Particle Size", "folder": "Particles",
                      "min": 0.001, "max": 0.05, "step": 0.001},
    "galaxy_radius": {"label": "Galaxy Radius", "folder": "Galaxy",
                      "min": 0.0, "max": 20.0, "step": 0.01},
    "branch_count": {"label": "Galaxy Branches", "folder": "Galaxy",
                     "min": 2, "max": 20, "step": 1},
    "spin_angle_coefficient": {"label": "Galaxy Spin", "folder": "Galaxy",
                               "min": -5.0, "max": 5.0, "step": 0.01},
    "randomness_spread": {"label": "Galaxy Randomness", "folder": "Galaxy",
                          "min": 0.0, "max": 2.0, "step": 0.001},
    "randomness_power": {"label": "Galaxy Randomness Power", "folder": "Galaxy",
                         "min": 0.0, "max": 10.0, "step": 0.001},
    "inside_color": {"label": "Galaxy Inside Color", "folder": "Galaxy",
                     "hue_step": 10.0},
    "outside_color": {"label": "Galaxy Outside Color", "folder": "Galaxy",
                      "hue_step": 10.0},
}

# Intro schedule, played once at start-up. Times in seconds.
ANIMATION = [
    {"name": "galaxy_radius", "to": 8.0, "duration": 5.0, "delay": 0.0,
     "ease": "power4.inOut"},
    {"name": "randomness_power", "to": 3.0, "duration": 5.0, "delay": 5.0,
     "ease": "power4.inOut"},
    {"name": "particle_count", "to": 100000, "duration": 5.0, "delay": 0.0,
     "ease": "power1.inOut"},
]

RENDER = {
    "rotation_speed": 0.1,         # Radians per second about the Y axis
    "min_point_size": 1.0,
    "max_point_size": 64.0,
    "max_dt": 0.05,
}

COLORS = {
    "background": (0.0, 0.0, 0.0, 1.0),
    "text": (230, 230, 230),
    "highlight": (255, 200, 90),
}
