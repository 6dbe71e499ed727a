"""
Module 'bookings': stockage des réservations, jetons uniques et actions admin.
"""
