"""
todayschedule – today's class list for the home-screen widget,
plus the exact-alarm permission bridge.
"""
