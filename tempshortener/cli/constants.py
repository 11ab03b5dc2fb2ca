# Menu choices
CREATE = '1'
OPEN = '2'
LIST = '3'
STATS = '4'
EXIT = '5'

MENU = (
    '1. Create short link\n'
    '2. Open short link\n'
    '3. List my links\n'
    '4. Show statistics\n'
    '5. Exit\n'
    'Choose a menu item: '
)

# Messages
BANNER = '=== Short link service ==='
INVALID_CHOICE = 'Invalid choice. Pick one of the menu items.'
NO_LINKS = 'No links found.'
GOODBYE = 'Bye!'
