import sys
from bankbot.activities import render_text
from bankbot.bot import BankingBot

CONVERSATION_ID = "console"

def main():
    """Main application loop."""
    print("Starting Conversational Banking Assistant...")
    bot = BankingBot()

    try:
        while True:
            print("You: ", end="", flush=True)
            user_input = input()
            if user_input.strip().lower() == "exit":
                break

            for activity in bot.on_message(CONVERSATION_ID, user_input):
                bot_response = render_text(activity)
                if bot_response:
                    print(f"Bot: {bot_response.strip()}")

    except (KeyboardInterrupt, EOFError):
        print("\nExiting chat. Goodbye!")
        sys.exit(0)

if __name__ == "__main__":
    main()
