"""
HTTP surface of the Brightidy API.

Routes are served from the root path (``/register``, ``/bookings``
and so on) to match the paths used by existing clients.
"""
