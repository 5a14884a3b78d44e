"""Training Attendance package.

Organized by feature modules (coaches, sessions, players, attendance) with a
thin Flask controller layer over service/repository layers.
"""
