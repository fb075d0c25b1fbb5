# cli.py
import argparse
import json

from lapscout.agent.executor import Assistant
from lapscout.config.settings import AssistantConfig
from lapscout.utils.logger import logger


def main():
    parser = argparse.ArgumentParser(description="LapScout laptop assistant (local)")
    sub = parser.add_subparsers(dest="command", required=True)

    p_compare = sub.add_parser("compare", help="Compare laptops by URL or name")
    p_compare.add_argument("queries", nargs="+", help='e.g. "dell xps" "macbook air" or product URLs')
    p_compare.add_argument("--persona", help="Gaming, Creative, Programming, Student or Portable")

    p_chat = sub.add_parser("chat", help="Send one chat message")
    p_chat.add_argument("message", type=str, help="e.g. show me the best dell laptops for students")
    p_chat.add_argument("--persona", help="Optional persona for ranking")

    p_serve = sub.add_parser("serve", help="Run the HTTP API")
    p_serve.add_argument("--host", default="127.0.0.1")
    p_serve.add_argument("--port", type=int, default=8000)

    args = parser.parse_args()

    if args.command == "serve":
        import uvicorn
        uvicorn.run("lapscout.main:app", host=args.host, port=args.port)
        return

    assistant = Assistant(AssistantConfig.from_env())

    if args.command == "compare":
        result = assistant.compare(args.queries, args.persona)
        for s in result.ranked:
            logger.info(f"{s.score:>3}  {s.laptop.name}  ({s.why})")
        if not result.ranked:
            for lp in result.laptops:
                logger.info(f"{lp.name}  [{lp.data_source}]")
        print(result.summary)
    else:
        reply = assistant.handle_message(args.message, persona=args.persona)
        logger.info(f"PLAN KIND: {reply.kind}")
        if reply.laptops:
            logger.info("LAPTOPS:\n " + json.dumps([lp.model_dump(by_alias=True) for lp in reply.laptops], indent=2))
        print(reply.message)


if __name__ == "__main__":
    main()
