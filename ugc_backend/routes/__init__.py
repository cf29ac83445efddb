"""
UGC Agency Backend — API Routes Package
=========================================

Route inventory:
    auth.py            /api/auth           public (/me needs a token)
    dashboard.py       /api/dashboard      auth, header org or first membership
    campaigns.py       /api/campaigns      auth + organization
    clients.py         /api/clients        auth + organization + ADMIN/STAFF
    creators.py        /api/creators       auth
    media.py           /api/media          auth + organization
    messages.py        /api/messages       auth + organization
    organizations.py   /api/organizations  auth, membership checked per operation
    users.py           /api/users          auth
    email.py           /api/email          auth + organization (mocked)
    drive.py           /api/drive          auth + organization (mocked)
    health.py          /health             public

Routes stay thin: parse the request, resolve gates through dependencies,
call one service method, return its schema.
"""
