import json

from nft_validator.validator import DEFAULT_VERSION, validate


def main():
    metadata = {
        "creator": "HANGRY BARBOONS",
        "description": "HANGRY BARBOONS are 4,444 unique citizens from the United Hashgraph of Planet Earth. Designed and illustrated by President HANGRY.",
        "format": "none",
        "name": "HANGRY BARBOON #2343",
        # "image" left out, HIP412@2.0.0 requires it
        "type": "image/png",
        "properties": {"edition": 2343},
        "attributes": [
            {"trait_type": "Background", "value": "Yellow"},
            {"trait_type": "Fur", "value": "Gold"},
            {"trait_type": "Clothing", "value": "Floral Jacket"},
            {"trait_type": "Mouth", "value": "Tongue"},
            {"trait_type": "Sing", "value": "None"},
        ],
    }

    results = validate(metadata, DEFAULT_VERSION)
    print(json.dumps(results, indent=2))

    # Output:
    # {
    #   "errors": [
    #     {
    #       "type": "schema",
    #       "msg": "requires property 'image'",
    #       "path": "instance"
    #     }
    #   ],
    #   "warnings": []
    # }


if __name__ == "__main__":
    main()
